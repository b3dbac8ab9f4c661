"""
Maison Catalog API: Routes Package
====================================

Route Inventory:
    - products.py:     POST/GET /api/products, PUT/DELETE /api/products/{id}
    - hero_images.py:  POST/GET /api/hero-images,
                       PATCH /api/hero-images/{id}/toggle,
                       DELETE /api/hero-images/{id}
    - health.py:       GET /health

Routes stay thin: read the form and files, call a service, return its model.
"""
