"""
Main FastAPI application entry point.
Initializes the app, middleware, and routes.
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

from speedread.config import settings
from speedread.core.dependencies import get_vocabulary_service

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format=settings.LOG_FORMAT
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Readability analysis and spaced repetition vocabulary review",
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup_event():
    """
    Run on application startup.
    Loads the persisted vocabulary; a corrupt store stops startup.
    """
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"Environment: {settings.ENVIRONMENT}")

    service = app.dependency_overrides.get(get_vocabulary_service, get_vocabulary_service)()
    if service.load():
        logger.info(f"Loaded {len(service.words)} vocabulary words")

    logger.info("Application started successfully")


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Application shutdown complete")


@app.get("/")
async def root():
    """Health check endpoint"""
    return JSONResponse(content={
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "healthy",
        "environment": settings.ENVIRONMENT
    })


@app.get("/health")
async def health_check():
    """
    Detailed health check endpoint.
    Reports whether persistence and definition lookup are configured.
    """
    health_status = {
        "status": "healthy",
        "services": {
            "api": "up",
            "storage": "file" if settings.VOCABULARY_STORE_PATH else "memory",
            "definitions": "groq" if settings.GROQ_API_KEY else "fallback"
        }
    }

    return JSONResponse(content=health_status)


# Include routers
from speedread.api.v1.endpoints import analysis
from speedread.api.v1.endpoints import vocabulary
from speedread.api.v1.endpoints import sessions
app.include_router(analysis.router, prefix=f"{settings.API_V1_PREFIX}/analysis", tags=["analysis"])
app.include_router(sessions.router, prefix=f"{settings.API_V1_PREFIX}/vocabulary/sessions", tags=["sessions"])
app.include_router(vocabulary.router, prefix=f"{settings.API_V1_PREFIX}/vocabulary", tags=["vocabulary"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "speedread.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG
    )
