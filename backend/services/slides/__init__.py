"""Slide CRUD and ordering."""

from .service import SlideService

__all__ = ["SlideService"]
