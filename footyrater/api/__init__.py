"""HTTP API."""

from footyrater.api.app import create_app

__all__ = ["create_app"]
