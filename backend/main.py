from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tinte import __version__
from tinte.api.v1 import router as v1_router
from tinte.config import config
from tinte.schemas import HealthResponse
from tinte.utils.logging import get_logger

logger = get_logger()

app = FastAPI(
    title="Tinte Palette Service",
    description="Terminal color schemes from wallpapers and seed colors",
    version=__version__
)

allowed_origins = [o.strip() for o in config.ALLOWED_ORIGINS.split(",") if o.strip()] or [
    "http://localhost:3000",
    "http://localhost:5173",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(v1_router)


@app.get("/healthz", response_model=HealthResponse)
def health_check():
    """Health check endpoint"""
    return HealthResponse(status="ok", service="tinte", version=__version__)


@app.get("/")
def root():
    """Root endpoint"""
    return {
        "message": "Tinte Palette API",
        "version": __version__,
        "docs": "/docs"
    }


logger.info("Tinte service initialized", extra={"version": __version__, "cors_origins": allowed_origins})
