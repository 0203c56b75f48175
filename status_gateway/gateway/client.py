"""Shared outbound HTTP client and the forward primitive used by every operation."""

import logging
import time
from typing import Any, Dict, Optional

import httpx

from status_gateway.config.settings import get_client_config
from status_gateway.core.logging_utils import log_forward
from status_gateway.gateway.envelope import Context, Response

logger = logging.getLogger(__name__)


class StatusClient:
    """One httpx.Client per process: keep-alive disabled, no connection cap by default, fixed timeout.

    The timeout bounds the whole exchange (connect, headers and body), not only each network phase.
    Build once at startup and inject into StatusRouter. Safe for concurrent use from multiple threads;
    configuration is fixed after construction.
    """

    def __init__(
        self,
        client_config: Optional[Dict[str, Any]] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        cfg = client_config if client_config is not None else get_client_config()
        self._timeout = float(cfg["timeout_seconds"])
        self._error_format = cfg["error_format"]
        self._client = httpx.Client(
            timeout=httpx.Timeout(self._timeout),
            # max_keepalive_connections=0: every connection is closed after its response.
            # max_connections=None: calls never wait in the pool.
            limits=httpx.Limits(
                max_connections=cfg.get("max_connections"),
                max_keepalive_connections=0,
            ),
            follow_redirects=bool(cfg["follow_redirects"]),
            transport=transport,
        )
        logger.debug(
            "StatusClient timeout=%ss max_connections=%s error_format=%s",
            self._timeout,
            cfg.get("max_connections") or "unbounded",
            self._error_format,
        )

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]] = None, **kwargs: Any) -> "StatusClient":
        return cls(get_client_config(config), **kwargs)

    @property
    def timeout(self) -> float:
        return self._timeout

    def _remote_error(self, status_code: int, text: str) -> str:
        if self._error_format == "body_only" and text:
            return text
        if self._error_format == "body_only":
            # envelope must carry an error
            return f"HTTP {status_code}"
        return f"Storage Response: [HTTP {status_code}] {text}"

    def forward(self, ctx: Context, path: str, trace_id: Optional[str] = None) -> Response:
        """GET ctx.status_url + path and normalize the outcome. Never raises.

        200 -> Response(result=<raw body>); any other status -> Response(error=<formatted status/body>);
        transport failure (DNS, refused, timeout, invalid URL) -> Response(error=str(exc)).
        Exceeding the timeout across the whole exchange -> Response(error="timeout: request exceeded <t>s").
        A body that cannot be read is reported as an error rather than an empty envelope.
        """
        url = ctx.status_url + path
        start = time.monotonic()
        deadline = start + self._timeout
        body: Optional[bytes] = None
        text = ""
        read_error: Optional[Exception] = None
        expired = False
        try:
            with self._client.stream("GET", url) as resp:
                status_code = resp.status_code
                chunks = []
                try:
                    for chunk in resp.iter_bytes():
                        chunks.append(chunk)
                        if time.monotonic() > deadline:
                            expired = True
                            break
                    expired = expired or time.monotonic() > deadline
                    body = b"".join(chunks)
                    if status_code != 200:
                        text = body.decode(resp.encoding or "utf-8", errors="replace")
                except httpx.HTTPError as e:
                    read_error = e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            err = str(e) or type(e).__name__
            log_forward(url, "transport_error", duration_ms=_ms_since(start), error=err, trace_id=trace_id)
            return Response(error=err)

        duration_ms = _ms_since(start)
        if expired:
            err = f"timeout: request exceeded {self._timeout}s"
            log_forward(url, "transport_error", status_code=status_code, duration_ms=duration_ms, error=err, trace_id=trace_id)
            return Response(error=err)
        if status_code == 200 and read_error is None:
            log_forward(url, "ok", status_code=status_code, duration_ms=duration_ms, trace_id=trace_id)
            return Response(result=body)

        if read_error is not None:
            detail = str(read_error) or type(read_error).__name__
            if status_code == 200:
                err = f"failed to read response body: {detail}"
            else:
                err = self._remote_error(status_code, f"<unreadable body: {detail}>")
            log_forward(url, "read_error", status_code=status_code, duration_ms=duration_ms, error=err, trace_id=trace_id)
            return Response(error=err)

        err = self._remote_error(status_code, text)
        log_forward(url, "remote_error", status_code=status_code, duration_ms=duration_ms, error=err, trace_id=trace_id)
        return Response(error=err)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "StatusClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


def _ms_since(start: float) -> float:
    return (time.monotonic() - start) * 1000.0
