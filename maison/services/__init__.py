"""
Maison Catalog API: Services Layer
====================================

What:  Business logic between routes (HTTP) and the store (persistence).

Service Inventory:
    - ImageHost (abstract): interface for remote image storage
    - CloudinaryImageHost: concrete implementation using the Cloudinary SDK
    - ProductService: validate → upload → persist workflow for products
    - HeroImageService: create / list / toggle / delete for hero images
"""
