"""Forwarding router: named operations proxied to the remote status service."""

from status_gateway.gateway.client import StatusClient
from status_gateway.gateway.envelope import Context, Response
from status_gateway.gateway.params import (
    MachinesParams,
    NetinfoParams,
    PlannersParams,
    SysinfoParams,
    build_path,
    decode_params,
)
from status_gateway.gateway.routes import (
    Handler,
    StatusRouter,
    UnknownOperationError,
    build_route_table,
    get_routes,
)

__all__ = [
    "Context",
    "Handler",
    "MachinesParams",
    "NetinfoParams",
    "PlannersParams",
    "Response",
    "StatusClient",
    "StatusRouter",
    "SysinfoParams",
    "UnknownOperationError",
    "build_path",
    "build_route_table",
    "decode_params",
    "get_routes",
]
