"""Dispatch API for the forwarding router (FastAPI + uvicorn)."""

from status_gateway.server.app import create_app, run_server

__all__ = ["create_app", "run_server"]
