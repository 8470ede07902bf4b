"""Deterministic decorative gradients for projects."""

from .gradients import (
    GRADIENT_PALETTES,
    generate_gradient_config,
    generate_theme_tokens,
    hash_string,
    seeded_random,
)

__all__ = [
    "GRADIENT_PALETTES",
    "generate_gradient_config",
    "generate_theme_tokens",
    "hash_string",
    "seeded_random",
]
