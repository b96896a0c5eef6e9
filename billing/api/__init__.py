"""HTTP API for the billing service."""

from billing.api.main import create_app

__all__ = ["create_app"]
