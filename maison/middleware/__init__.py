"""
Maison Catalog API: Middleware Package
========================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    1. Request ID first, so the access log line carries the correlation id
    2. Logging measures the full duration including uploads
    3. CORS (FastAPI's CORSMiddleware) answers preflight requests
"""
