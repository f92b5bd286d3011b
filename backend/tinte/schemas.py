"""
Tinte API Schemas
Pydantic models for palette request/response validation.
"""
from typing import Dict, List

from pydantic import BaseModel, Field

from .services.colors import Palette
from .services.orchestrator import PaletteResult


HEX_FIELD_PATTERN = r"^#[0-9A-Fa-f]{6}$"


class ColorPaletteRequest(BaseModel):
    """Seed-color palette request."""
    hex: str = Field(..., description="Seed color as #RRGGBB (the leading # is optional)")
    mode: str = Field("dark", pattern="^(dark|light)$", description="Palette mode")


class SemanticResponse(BaseModel):
    """Semantic UI-role colors."""
    accent: str = Field(..., pattern=HEX_FIELD_PATTERN)
    accent_dim: str = Field(..., pattern=HEX_FIELD_PATTERN)
    accent_bright: str = Field(..., pattern=HEX_FIELD_PATTERN)
    secondary: str = Field(..., pattern=HEX_FIELD_PATTERN)
    surface: str = Field(..., pattern=HEX_FIELD_PATTERN)
    on_accent: str = Field(..., pattern=HEX_FIELD_PATTERN)
    on_surface: str = Field(..., pattern=HEX_FIELD_PATTERN)


class PaletteResponse(BaseModel):
    """Synthesized 16-color palette."""
    strategy: str = Field(..., description="Path that built the palette ('chromatic', 'monochrome', 'subtle', 'seed' or 'default')")
    mode: str = Field(..., description="Palette mode ('dark' or 'light')")
    background: str = Field(..., pattern=HEX_FIELD_PATTERN, description="Slot 0")
    foreground: str = Field(..., pattern=HEX_FIELD_PATTERN, description="Slot 15")
    colors: List[str] = Field(..., min_length=16, max_length=16, description="Slots 0-15 as #rrggbb")
    semantic: SemanticResponse = Field(..., description="Semantic accent colors")
    from_cache: bool = Field(False, description="Whether the palette came from the cache")
    request_id: str = Field(..., description="Request identifier")

    @classmethod
    def from_result(cls, result: PaletteResult) -> "PaletteResponse":
        palette: Palette = result.palette
        semantic: Dict[str, str] = {name: color.to_hex() for name, color in palette.semantic.as_dict().items()}
        return cls(
            strategy=palette.strategy,
            mode=result.mode.value,
            background=palette.background.to_hex(),
            foreground=palette.foreground.to_hex(),
            colors=palette.to_hex_list(),
            semantic=SemanticResponse(**semantic),
            from_cache=result.from_cache,
            request_id=result.request_id,
        )


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = Field("ok", description="Service health status")
    service: str = Field("tinte", description="Service name")
    version: str = Field(..., description="Service version")


class ErrorResponse(BaseModel):
    """Error response."""
    detail: str = Field(..., description="Error message")
