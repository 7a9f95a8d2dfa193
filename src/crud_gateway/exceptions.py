from __future__ import annotations


class GatewayError(Exception):
    """Base exception for crud-gateway."""


class ConfigurationError(GatewayError):
    """Raised when a required setting is missing or unusable."""
