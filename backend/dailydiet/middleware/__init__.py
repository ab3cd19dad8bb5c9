# Middleware package init
"""
Daily Diet Backend: Middleware Package
========================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    Responses travel back in reverse, so the logging middleware sees the
    final status code and the request ID header is added last.

The session guard is not middleware: it is a FastAPI dependency
(dailydiet.dependencies) attached only to the /meals routes.
"""
