"""FastAPI dispatch app: POST /monitoring/{operation}, GET /operations, GET /health.

Each request is handed to the registered handler in the threadpool; the app adds no semantics beyond
mapping the operation name and serializing the envelope.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from status_gateway.config.settings import get_server_config, get_status_config
from status_gateway.gateway import Context, StatusClient, StatusRouter

logger = logging.getLogger(__name__)


def create_app(router: StatusRouter, ctx: Context) -> FastAPI:
    """Build FastAPI app around an already-constructed router and the context passed to every call."""
    app = FastAPI(title="Status Gateway", description="Named operations proxied to the remote status service")

    @app.get("/health")
    def get_health() -> Dict[str, Any]:
        return {"status": "ok", "status_url": ctx.status_url}

    @app.get("/operations")
    def get_operations() -> Dict[str, Any]:
        """Registered operation names, sorted."""
        return {"operations": sorted(router.get_routes())}

    @app.post("/monitoring/{operation}")
    async def post_operation(operation: str, request: Request) -> JSONResponse:
        """Forward the raw body as parameters. Always 200 with {error, result} for known operations; 404 otherwise."""
        handler = router.get_routes().get(operation)
        if handler is None:
            return JSONResponse(status_code=404, content={"error": f"unknown operation: {operation}", "result": None})
        raw = await request.body()
        resp = await run_in_threadpool(handler, ctx, raw)
        return JSONResponse(status_code=200, content=resp.to_dict())

    return app


def run_server(config: dict, status_url: Optional[str] = None) -> None:
    """Build the shared client and router once, then serve the dispatch app with uvicorn."""
    import uvicorn

    server_cfg = get_server_config(config)
    ctx = Context(status_url=(status_url or get_status_config(config)["url"]).rstrip("/"))
    client = StatusClient.from_config(config)
    router = StatusRouter(client)
    app = create_app(router, ctx)
    logger.info(
        "Status gateway on %s:%s -> %s (operations=%s)",
        server_cfg["host"],
        server_cfg["port"],
        ctx.status_url,
        ",".join(sorted(router.get_routes())),
    )
    try:
        uvicorn.run(app, host=server_cfg["host"], port=server_cfg["port"], log_level="info")
    finally:
        client.close()
