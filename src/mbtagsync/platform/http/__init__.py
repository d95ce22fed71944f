"""HTTP transport package shared by the remote service clients."""

from .client import HTTPClient, HTTPError, HTTPResponse, RequestsHTTPClient

__all__ = ["HTTPClient", "HTTPError", "HTTPResponse", "RequestsHTTPClient"]
