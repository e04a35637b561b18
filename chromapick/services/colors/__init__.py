"""
Chromapick Colors Module

Palette extraction (sampling, quantization, ranking and distance-based
selection), color formatting helpers and swatch rendering.
"""

from .extraction import Color, Bucket, ExtractionResult, analyze_bitmap, extract_palette

__all__ = ["Color", "Bucket", "ExtractionResult", "analyze_bitmap", "extract_palette"]
