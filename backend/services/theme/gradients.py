"""
Seeded gradient generation.

The browser renders project backgrounds from the same algorithm, so every
step here must produce the same numbers as its JavaScript counterpart:
32-bit wrap-around string hashing over UTF-16 code units, and a small linear
congruential generator. Identical seeds give identical configurations.
"""

import math
from collections.abc import Callable

from shared.theme_models import GradientBlob, GradientConfig, GradientPalette, ThemeTokens

GRADIENT_PALETTES = [
    GradientPalette(name="cool-professional", colors=["#3b82f6", "#10b981", "#ec4899"], accent="#3b82f6"),
    GradientPalette(name="vibrant", colors=["#14b8a6", "#8b5cf6", "#f59e0b"], accent="#14b8a6"),
    GradientPalette(name="tech", colors=["#06b6d4", "#6366f1", "#f43f5e"], accent="#06b6d4"),
    GradientPalette(name="bold", colors=["#10b981", "#8b5cf6", "#ef4444"], accent="#10b981"),
]

MIN_BLOB_DISTANCE = 30
MAX_PLACEMENT_ATTEMPTS = 10


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def hash_string(value: str) -> int:
    """Absolute value of the 32-bit ``h * 31 + c`` hash over UTF-16 code units."""
    encoded = value.encode("utf-16-le")
    result = 0
    for index in range(0, len(encoded), 2):
        code_unit = encoded[index] | (encoded[index + 1] << 8)
        result = _to_int32((result << 5) - result + code_unit)
    return abs(result)


def seeded_random(seed: int) -> Callable[[], float]:
    """Return a generator of floats in [0, 1) driven by an LCG."""
    state = seed

    def random() -> float:
        nonlocal state
        state = (state * 9301 + 49297) % 233280
        return state / 233280

    return random


def generate_gradient_config(seed: str, is_mobile: bool = False) -> GradientConfig:
    """
    Build the gradient for a seed (normally the project id).

    Args:
        seed: Seed string
        is_mobile: Use three blobs instead of four

    Returns:
        Palette, blob placement and noise flag
    """
    random = seeded_random(hash_string(seed))
    palette = GRADIENT_PALETTES[math.floor(random() * len(GRADIENT_PALETTES))]

    blobs: list[GradientBlob] = []
    for index in range(3 if is_mobile else 4):
        attempts = 0
        while True:
            # Keep blobs inside the 20-80% box
            x = 20 + random() * 60
            y = 20 + random() * 60
            attempts += 1
            crowded = any(
                math.sqrt((blob.x - x) ** 2 + (blob.y - y) ** 2) < MIN_BLOB_DISTANCE
                for blob in blobs
            )
            if attempts >= MAX_PLACEMENT_ATTEMPTS or not crowded:
                break

        color = palette.colors[index % len(palette.colors)]
        size = 20 + random() * 8
        blobs.append(GradientBlob(color=color, x=x, y=y, size=size))

    return GradientConfig(palette=palette, blobs=blobs, noise=random() > 0.5)


def generate_theme_tokens(palette: GradientPalette) -> ThemeTokens:
    return ThemeTokens(
        accent=palette.accent,
        surface="rgba(255, 255, 255, 0.9)",
        border="rgba(0, 0, 0, 0.1)",
        text_primary="#1f2937",
        text_secondary="#6b7280",
    )
