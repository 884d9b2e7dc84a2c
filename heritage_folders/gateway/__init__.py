"""
API Gateway Module

Centralized gateway layer for the API that handles:
- Request routing and versioning
- Middleware management
- Error handling

The gateway acts as the single entry point for all API requests.
"""
from .gateway import APIGateway
from .versioning import APIVersion, VersionRouter

__all__ = ["APIGateway", "APIVersion", "VersionRouter"]
