"""Infrastructure layer: HTTP transport and the storefront API adapter."""

from .api import StorefrontApi
from .http_client import HttpClient

__all__ = ["HttpClient", "StorefrontApi"]
