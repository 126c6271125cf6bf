"""
API Gateway Module

Centralized gateway layer for the API: middleware, error rendering, router
registration, static file serving and health checks.
"""
from .gateway import APIGateway

__all__ = ["APIGateway"]
