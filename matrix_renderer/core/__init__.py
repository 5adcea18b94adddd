"""
Core Business Logic
==================

Pure rendering engine, independent of any transport.

Modules:
- matrix: Matrix data model and pixel accessor
- exceptions: Error hierarchy shared by the core and the API layer
- rendering: Color decoding, block and circle rasterization, PNG encoding
"""
