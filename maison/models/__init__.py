# Importing the models registers them with Base.metadata (used by Alembic and tests)
from maison.models.hero_image import HeroImage
from maison.models.product import Product

__all__ = ["HeroImage", "Product"]
