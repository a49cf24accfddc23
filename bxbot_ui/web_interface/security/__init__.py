"""
Security components for the BX-bot UI web interface.

This module provides JWT token management and bearer token authentication
for secure access to the UI API.
"""

from .authentication import AuthenticatedPrincipal, JwtAuthenticationFilter, UserDirectory
from .token_service import Claims, TokenService

__all__ = [
    "AuthenticatedPrincipal",
    "Claims",
    "JwtAuthenticationFilter",
    "TokenService",
    "UserDirectory",
]
