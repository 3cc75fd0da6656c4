"""
API module - FastAPI routers, endpoint definitions and error handlers.

Usage:
    from app.api.routes import api_router
    app.include_router(api_router)
"""
