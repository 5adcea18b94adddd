"""
Test Suite
==========

Test suite matching the matrix_renderer/ package structure.

Test Categories:
- unit: Unit tests for individual components
- integration: HTTP contract tests through the FastAPI test client
"""
