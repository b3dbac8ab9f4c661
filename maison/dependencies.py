"""
Request-scoped accessors for the process-wide handles.

The image host is created once by the app factory and kept on app.state;
routes receive it through Depends(get_image_host) so tests can swap it with
app.dependency_overrides.
"""

from typing import List, Optional, Sequence

from fastapi import Request, UploadFile

from maison.services.image_host_base import ImageHost


def get_image_host(request: Request) -> ImageHost:
    return request.app.state.image_host


async def read_uploads(files: Optional[Sequence[UploadFile]]) -> List[bytes]:
    """
    Reads multipart file parts into memory, in submission order.

    Parts without a filename are skipped: browsers send one for an empty
    <input type="file">.
    """
    buffers: List[bytes] = []
    for upload in files or []:
        try:
            if upload.filename:
                buffers.append(await upload.read())
        finally:
            await upload.close()
    return buffers
