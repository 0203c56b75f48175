"""Status-forwarding gateway: named operations proxied to a remote monitoring service."""

from status_gateway.gateway import Context, Response, StatusClient, StatusRouter, get_routes

__all__ = ["Context", "Response", "StatusClient", "StatusRouter", "get_routes"]
