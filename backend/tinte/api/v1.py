"""
Tinte v1 API Routes
Palette synthesis from uploaded images, seed colors and the built-in default.
"""
import os
from typing import Any, Dict

from fastapi import APIRouter, File, HTTPException, Query, UploadFile
from fastapi.concurrency import run_in_threadpool

from ..config import config
from ..schemas import ColorPaletteRequest, ErrorResponse, PaletteResponse
from ..services.cache import InMemoryLRUCache, PaletteCache
from ..services.colors import ColorParseError, Mode
from ..services.imaging import stage_upload
from ..services.orchestrator import PaletteOrchestrator
from ..services.sampling import SamplingError
from ..utils.logging import get_logger
from ..utils.metrics import get_metrics

router = APIRouter(prefix="/v1", tags=["Palettes"])
logger = get_logger()

orchestrator = PaletteOrchestrator(
    cache=PaletteCache(InMemoryLRUCache(config.CACHE_MAX_ENTRIES)) if config.CACHE_ENABLED else None,
)


@router.post("/palette/image",
             response_model=PaletteResponse,
             responses={400: {"model": ErrorResponse}, 415: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
             summary="Palette from image",
             description="Sample an uploaded wallpaper and synthesize a 16-color palette")
async def palette_from_image(
    file: UploadFile = File(..., description="Image file (JPEG, PNG or WebP)"),
    mode: str = Query("dark", pattern="^(dark|light)$", description="Palette mode"),
    sampler: str = Query(config.SAMPLER_DEFAULT, pattern="^(auto|imagemagick|pillow)$", description="Sampling engine"),
) -> PaletteResponse:
    palette_mode = Mode(mode)
    path = await stage_upload(file)
    try:
        # Staged uploads get throwaway names, so key the cache on content
        cache_key = PaletteCache.content_key(path.read_bytes(), palette_mode)
        # Sampling shells out and quantizes; keep it off the event loop
        result = await run_in_threadpool(
            orchestrator.from_image, path, palette_mode, sampler=sampler, cache_key=cache_key
        )
    except SamplingError as e:
        logger.error("Image sampling failed", extra={"upload": file.filename, "error": str(e)})
        raise HTTPException(status_code=422, detail=f"Failed to sample image: {str(e)}")
    finally:
        os.unlink(path)

    return PaletteResponse.from_result(result)


@router.post("/palette/color",
             response_model=PaletteResponse,
             responses={400: {"model": ErrorResponse}},
             summary="Palette from seed color",
             description="Derive a 16-color palette from a single hex color")
def palette_from_color(request: ColorPaletteRequest) -> PaletteResponse:
    try:
        result = orchestrator.from_color(request.hex, Mode(request.mode))
    except ColorParseError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return PaletteResponse.from_result(result)


@router.get("/palette/default",
            response_model=PaletteResponse,
            summary="Default palette")
def palette_default(
    mode: str = Query("dark", pattern="^(dark|light)$", description="Palette mode"),
) -> PaletteResponse:
    return PaletteResponse.from_result(orchestrator.default(Mode(mode)))


@router.get("/metrics", summary="Service metrics")
def metrics_summary() -> Dict[str, Any]:
    try:
        return get_metrics().get_summary()
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to get metrics: {str(e)}")
