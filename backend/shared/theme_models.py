"""
Decorative gradient theme models.
"""

from pydantic import BaseModel, Field


class GradientPalette(BaseModel):
    """Named set of blob colours with an accent for links and CTAs."""

    name: str
    colors: list[str]
    accent: str


class GradientBlob(BaseModel):
    """One radial blob of the background gradient."""

    color: str
    x: float = Field(..., description="Horizontal centre, percent (0-100)")
    y: float = Field(..., description="Vertical centre, percent (0-100)")
    size: float = Field(..., description="Diameter in rem")


class ThemeTokens(BaseModel):
    """Colour tokens derived from a palette."""

    accent: str
    surface: str
    border: str
    text_primary: str = Field(..., serialization_alias="textPrimary")
    text_secondary: str = Field(..., serialization_alias="textSecondary")


class GradientConfig(BaseModel):
    """Deterministic gradient configuration for one seed."""

    palette: GradientPalette
    blobs: list[GradientBlob]
    noise: bool


class ThemeResponse(GradientConfig):
    """Gradient configuration plus theme tokens for a project."""

    seed: str
    tokens: ThemeTokens
