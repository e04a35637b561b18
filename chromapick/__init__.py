"""
Chromapick

Dominant color palette extraction for uploaded images.
"""

__version__ = "1.0.0"
