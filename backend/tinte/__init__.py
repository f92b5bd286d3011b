"""
Tinte

16-color terminal palette generation from wallpapers or a single seed color.
"""

__version__ = "0.3.0"
