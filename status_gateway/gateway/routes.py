"""Route table: operation name -> handler(ctx, raw_params) -> Response."""

import uuid
from dataclasses import replace
from types import MappingProxyType
from typing import Callable, Dict, Iterable, Mapping, Tuple, Type, TypeVar

from status_gateway.core.logging_utils import log_decode_error
from status_gateway.gateway.client import StatusClient
from status_gateway.gateway.envelope import Context, Response
from status_gateway.gateway.params import (
    NetinfoParams,
    PlannersParams,
    RawParams,
    SysinfoParams,
    build_path,
    decode_params,
)

Handler = Callable[[Context, RawParams], Response]

P = TypeVar("P")

STATUS_PREFIX = "/status"


class UnknownOperationError(KeyError):
    """Operation name is not registered in the route table."""


def build_route_table(entries: Iterable[Tuple[str, Handler]]) -> Mapping[str, Handler]:
    """Build a read-only route table. Raises ValueError on a duplicate name."""
    table: Dict[str, Handler] = {}
    for name, handler in entries:
        if name in table:
            raise ValueError(f"duplicate operation name: {name}")
        table[name] = handler
    return MappingProxyType(table)


class StatusRouter:
    """Forwarding router for the remote status service. The route table is built once and never changes."""

    def __init__(self, client: StatusClient) -> None:
        self._client = client
        self._routes = build_route_table(
            [
                ("get_machines", self.get_machines),
                ("get_netinfo", self.get_netinfo),
                ("get_planners", self.get_planners),
                ("get_sysinfo", self.get_sysinfo),
            ]
        )

    def get_routes(self) -> Mapping[str, Handler]:
        return self._routes

    def dispatch(self, operation: str, ctx: Context, raw_params: RawParams) -> Response:
        """Invoke the handler registered under operation. Raises UnknownOperationError before any call is made."""
        handler = self._routes.get(operation)
        if handler is None:
            raise UnknownOperationError(operation)
        return handler(ctx, raw_params)

    def _decode(self, operation: str, cls: Type[P], raw_params: RawParams, trace_id: str) -> Tuple[P, str]:
        params, decode_error = decode_params(cls, raw_params)
        if decode_error:
            log_decode_error(operation, decode_error, trace_id=trace_id)
        return params, decode_error

    def _forward(self, ctx: Context, path: str, decode_error: str, trace_id: str) -> Response:
        resp = self._client.forward(ctx, path, trace_id=trace_id)
        if decode_error:
            resp = replace(resp, decode_error=decode_error)
        return resp

    def get_machines(self, ctx: Context, raw_params: RawParams) -> Response:
        """List machine UUIDs known to the status service. Parameters are ignored."""
        trace_id = str(uuid.uuid4())[:8]
        return self._client.forward(ctx, build_path(STATUS_PREFIX + "/get_machines"), trace_id=trace_id)

    def get_sysinfo(self, ctx: Context, raw_params: RawParams) -> Response:
        """System status history for one machine: uptime, CPU, memory and swap, hard drives, load averages.

        Parameters: {"MachineUuid": str, "Limit": int}.
        """
        trace_id = str(uuid.uuid4())[:8]
        params, decode_error = self._decode("get_sysinfo", SysinfoParams, raw_params, trace_id)
        path = build_path(STATUS_PREFIX + "/get_sysinfo", params.machine_uuid, params.limit)
        return self._forward(ctx, path, decode_error, trace_id)

    def get_netinfo(self, ctx: Context, raw_params: RawParams) -> Response:
        """Network interfaces of one machine. Parameters: {"MachineUuid": str}."""
        trace_id = str(uuid.uuid4())[:8]
        params, decode_error = self._decode("get_netinfo", NetinfoParams, raw_params, trace_id)
        return self._forward(ctx, build_path(STATUS_PREFIX + "/get_netinfo", params.machine_uuid), decode_error, trace_id)

    def get_planners(self, ctx: Context, raw_params: RawParams) -> Response:
        trace_id = str(uuid.uuid4())[:8]
        params, decode_error = self._decode("get_planners", PlannersParams, raw_params, trace_id)
        return self._forward(ctx, build_path(STATUS_PREFIX + "/get_planners", params.machine_uuid), decode_error, trace_id)


def get_routes(client: StatusClient) -> Mapping[str, Handler]:
    """Route table for a router built on client."""
    return StatusRouter(client).get_routes()
