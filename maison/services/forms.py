"""
Helpers shared by the product and hero image services for turning raw
request values (path ids, multipart text fields) into typed values.
"""

import uuid
from typing import Dict, Optional, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from maison.exceptions import ValidationError

FormModel = TypeVar("FormModel", bound=BaseModel)


def parse_record_id(raw_id: str) -> Optional[uuid.UUID]:
    """
    Parses a path id; malformed ids come back as None.

    A malformed id cannot match any record, so callers treat it exactly like
    an unknown one (delete still succeeds, toggle still 404s).
    """
    try:
        return uuid.UUID(str(raw_id))
    except ValueError:
        return None


def parse_form(model: Type[FormModel], fields: Dict[str, Optional[str]]) -> FormModel:
    """
    Validates multipart text fields against `model`.

    Fields that were not sent (None) are left unset so update models can
    tell "omitted" apart from "sent".

    Raises:
        ValidationError: listing the offending field names
    """
    supplied = {name: value for name, value in fields.items() if value is not None}
    try:
        return model(**supplied)
    except PydanticValidationError as e:
        invalid = sorted({".".join(str(part) for part in err["loc"]) for err in e.errors()})
        raise ValidationError(
            message=f"Invalid or missing field(s): {', '.join(invalid)}",
            field=invalid[0] if len(invalid) == 1 else None,
            context={"fields": invalid},
        )
