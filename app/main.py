"""
Main FastAPI application
Test-preparation platform: auth, tests, attempts, analytics and reference data
"""
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import time

from app.config import Settings, settings as default_settings
from app.database import Database
from app.api import analytics, auth, colleges, study_materials, test_attempts, tests, users
from app.services.auth_service import AuthService

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application for the given settings

    The database handle is opened on startup and disposed on shutdown;
    routes reach it through ``app.state``.
    """
    settings = settings or default_settings

    # Configure logging
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Backend for test preparation: tests, attempts, analytics and study resources",
        docs_url="/docs",
        redoc_url="/redoc"
    )

    app.state.settings = settings
    app.state.auth_service = AuthService(settings)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request logging middleware
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log all requests with timing"""

        start_time = time.time()

        response = await call_next(request)

        duration = time.time() - start_time

        logger.info(
            f"{request.method} {request.url.path} - "
            f"Status: {response.status_code} - "
            f"Duration: {duration:.3f}s"
        )

        return response

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle unexpected errors gracefully"""

        logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)

        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error"}
        )

    # HTTP exception handler
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Format HTTP exceptions as {"error": message}"""

        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.detail}")
        else:
            logger.warning(
                f"{request.method} {request.url.path} rejected "
                f"({exc.status_code}): {exc.detail}"
            )

        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None)
        )

    # Malformed request bodies
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Report unparseable bodies as 400 with the first problem"""

        errors = exc.errors()
        if errors:
            first = errors[0]
            location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
            message = f"Invalid request: {location} {first.get('msg', '')}".strip()
        else:
            message = "Invalid request"

        logger.warning(f"{request.method} {request.url.path} rejected (400): {message}")

        return JSONResponse(status_code=400, content={"error": message})

    # Health check endpoint
    @app.get("/api/health")
    async def health_check():
        """Health check endpoint for monitoring"""
        return {
            "status": "OK",
            "timestamp": datetime.now(timezone.utc).isoformat()
        }

    # Root endpoint
    @app.get("/")
    async def root():
        """Root endpoint with API information"""
        return {
            "message": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "docs": "/docs",
            "health": "/api/health"
        }

    # Include routers
    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(tests.router)
    app.include_router(test_attempts.router)
    app.include_router(analytics.router)
    app.include_router(colleges.router)
    app.include_router(study_materials.router)

    # Startup event
    @app.on_event("startup")
    async def startup_event():
        """Open the database handle and ensure the schema"""
        logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")

        try:
            database = Database(settings.DATABASE_URL, echo=settings.DEBUG)
            database.create_all()
            app.state.database = database
            logger.info("Database initialized successfully")
        except Exception as e:
            logger.error(f"Failed to initialize database: {str(e)}")
            raise

        logger.info("Application startup complete")

    # Shutdown event
    @app.on_event("shutdown")
    async def shutdown_event():
        """Release database connections"""
        logger.info("Shutting down application")

        database = getattr(app.state, "database", None)
        if database is not None:
            database.dispose()

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=5000,
        reload=default_settings.DEBUG
    )
