# Middleware package init
"""
Alumnos API: Middleware Package
=================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID: correlation ID for every log line of the request
    2. Logging: one access line with status and duration
    3. GZip / CORS: FastAPI-provided
"""
