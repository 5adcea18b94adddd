"""
API Routes
==========

Routers mounted by the application factory.
"""
