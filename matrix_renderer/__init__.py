"""
Matrix Renderer
===============

An HTTP service that turns a rectangular matrix of packed 24-bit colors into
a PNG image.

This package provides:
- Core rendering engine (block and realistic modes)
- PNG encoding of rendered bitmaps
- FastAPI REST endpoints for HTTP access
"""

__version__ = "1.0.0"
__author__ = "Matrix Renderer Team"
