"""
Core app - pieces shared by every other app.

This module contains:
- Domain exceptions and value objects
- Fixed window rate limiter and its middleware
- Request logging and Prometheus middleware
- Health view and operator management commands
"""
