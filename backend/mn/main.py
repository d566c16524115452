"""
FastAPI entrypoint for the markdown-notebook backend application.
"""
import logging
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from mn.api.errors import backend_error_handler
from mn.api.router import api_router
from mn.core.config import settings
from mn.core.errors import BackendError
from mn.core.security import TokenConfig, token_config_from_settings
from mn.db.session import init_db


def create_app(token_config: Optional[TokenConfig] = None, debug: Optional[bool] = None) -> FastAPI:
    """Build the application with its token configuration and error handling."""
    app = FastAPI(
        title="markdown-notebook API",
        description="Backend API for path addressed personal notes",
        version="1.0.0"
    )
    app.state.token_config = token_config or token_config_from_settings()
    app.state.debug = settings.DEBUG if debug is None else debug

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Authorization", "Accept", "Content-Type"],
    )

    app.add_exception_handler(BackendError, backend_error_handler)

    # Include API routes
    app.include_router(api_router, prefix="/api/v1")

    @app.get("/")
    async def root():
        """Health check endpoint."""
        return {"message": "Hello from markdown-notebook!"}

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()


def run():
    """Create missing tables and serve the application with uvicorn."""
    import uvicorn

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    init_db()
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
