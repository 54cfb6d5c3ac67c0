"""Food analyzer implementations."""

from .vision_analyzer import VisionAnalyzer

__all__ = ["VisionAnalyzer"]
