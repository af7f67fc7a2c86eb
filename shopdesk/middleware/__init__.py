"""
ShopDesk Backend: Middleware Package
====================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    1. Request ID: correlation ID for logs and error bodies
    2. Logging: access line with status and duration
    3. CORS: FastAPI's CORSMiddleware (answers preflight requests)
"""
