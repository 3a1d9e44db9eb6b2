from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from timedmeta import __version__
from timedmeta.exceptions import ResourceNotFoundException, TimedMetaException, ValidationException
from timedmeta.providers.factory import ProviderFactory
from timedmeta.utils.logging_config import configure_logging
from app.routers import subtitles

configure_logging()

app = FastAPI(
    title="Timed Metadata API",
    description="Video analysis jobs rendered as WebVTT metadata tracks with a bounding box viewer",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
    allow_credentials=True
)

app.include_router(subtitles.router)


def _status_code(exc: TimedMetaException) -> int:
    if isinstance(exc, ValidationException):
        return 422
    if isinstance(exc, ResourceNotFoundException):
        return 404
    return 502


@app.exception_handler(TimedMetaException)
async def timedmeta_exception_handler(request: Request, exc: TimedMetaException):
    status_code = _status_code(exc)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(
        status_code=status_code,
        content={
            "error": type(exc).__name__,
            "message": str(exc),
            "error_code": exc.error_code,
            "details": exc.details,
        },
    )


@app.get("/", tags=["root"])
async def root():
    """Root endpoint providing API information."""
    return {
        "message": "Timed Metadata API",
        "version": __version__,
        "docs_url": "/docs",
        "openapi_url": "/openapi.json"
    }


@app.get("/health", tags=["health"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "timedmeta"}


@app.get("/providers", tags=["providers"])
async def get_supported_providers():
    """Get information about supported providers."""
    return {
        "supported_providers": ProviderFactory.get_supported_providers(),
        "message": "These are the currently supported providers for each service type"
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
