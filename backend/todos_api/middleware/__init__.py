# Middleware package init
"""
Todos API: Middleware Package
==============================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Logging] → [CORS] → Route Handler

    1. Logging: assigns the request id, logs the arrival line, then status
       and duration on the way out
    2. CORS: FastAPI's CORSMiddleware (handles preflight)

The request id reaches every log record through RequestIDLogFilter, which
setup_logging() installs on the root handler.
"""
