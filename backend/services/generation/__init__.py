"""Pitch deck generation."""

from .service import DeckGenerationResult, PitchDeckGenerator, derive_project_title

__all__ = ["DeckGenerationResult", "PitchDeckGenerator", "derive_project_title"]
