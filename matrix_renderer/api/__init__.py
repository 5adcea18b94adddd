"""
FastAPI REST Endpoints
======================

REST API endpoints for HTTP access to matrix rendering.

Endpoints:
- POST /renderImage: Block-mode matrix to PNG conversion
- POST /renderRealistic: Realistic-mode matrix to PNG conversion
- GET /health: Health check endpoint
"""
