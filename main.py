from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from chromapick import __version__
from chromapick.api.palette import router as palette_router
from chromapick.config import config
from chromapick.schemas import HealthResponse
from chromapick.utils.logging import get_logger

logger = get_logger()

app = FastAPI(
    title="Chromapick",
    description="Extract a small, visually distinct color palette from an image",
    version=__version__
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.allowed_origins(),
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(palette_router)


@app.get("/healthz", response_model=HealthResponse)
def health_check():
    """Health check endpoint."""
    return HealthResponse(ok=True, version=__version__, service="chromapick")


@app.get("/")
def root():
    """Root endpoint"""
    return {
        "message": "Chromapick palette extraction API",
        "version": __version__,
        "docs": "/docs"
    }


logger.info("Chromapick API initialized", extra={"version": __version__})


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000)
