"""Lightweight Flask-based HTTP API server with health checks, request IDs, CORS and MySQL settings."""

__version__ = "0.1.0"