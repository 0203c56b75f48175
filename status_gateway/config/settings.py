"""Gateway config: status (remote service), client (shared HTTP client), server (dispatch API).

Defaults: loaded from config/config.yaml.example (single source of truth, no code-level defaults).
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

ERROR_FORMATS = ("status_prefixed", "body_only")

_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
_EXAMPLE_PATH = _PROJECT_ROOT / "config" / "config.yaml.example"

# Lazy-loaded example config (single source of truth for defaults)
_EXAMPLE_CONFIG: Optional[Dict[str, Any]] = None


def _load_example_config() -> Dict[str, Any]:
    """Load config.yaml.example as defaults. No code-level defaults."""
    global _EXAMPLE_CONFIG
    if _EXAMPLE_CONFIG is None:
        with open(_EXAMPLE_PATH, encoding="utf-8") as f:
            _EXAMPLE_CONFIG = yaml.safe_load(f) or {}
    return _EXAMPLE_CONFIG


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge override into base. Override values take precedence."""
    out = dict(base)
    for k, v in override.items():
        if k in out and isinstance(out[k], dict) and isinstance(v, dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def _section(config: Optional[Dict[str, Any]], section: str) -> Dict[str, Any]:
    """Merge config with example and return one section ({} if missing)."""
    merged = _deep_merge(_load_example_config(), config or {})
    s = merged.get(section)
    return dict(s) if isinstance(s, dict) else {}


def read_config(config_path: Optional[str] = None) -> Tuple[dict, str]:
    """Load YAML config. Path: argument, env STATUS_GATEWAY_CONFIG, config/config.yaml, else the example. Returns (config, resolved_path)."""
    config_path = config_path or os.environ.get("STATUS_GATEWAY_CONFIG")
    if config_path is None:
        config_path = str(_PROJECT_ROOT / "config" / "config.yaml")
        if not Path(config_path).exists():
            config_path = str(_EXAMPLE_PATH)
    if not Path(config_path).exists():
        raise FileNotFoundError(f"Config not found: {config_path}")
    config_path = str(Path(config_path).resolve())
    with open(config_path, "r", encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}
    return config, config_path


def get_status_config(config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return status config (url). Env STATUS_GATEWAY_URL overrides status.url."""
    s = _section(config, "status")
    url = os.environ.get("STATUS_GATEWAY_URL") or s.get("url")
    if not url:
        raise ValueError("status.url is required")
    return {"url": str(url).rstrip("/")}


def get_client_config(config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return shared HTTP client config (timeout_seconds, max_connections, follow_redirects, error_format)."""
    c = _section(config, "client")
    timeout = float(c.get("timeout_seconds"))
    if timeout <= 0:
        raise ValueError(f"client.timeout_seconds must be > 0, got {timeout}")
    # None (default): no cap, calls never queue for a connection
    max_connections = c.get("max_connections")
    if max_connections is not None:
        max_connections = int(max_connections)
        if max_connections <= 0:
            raise ValueError(f"client.max_connections must be > 0 or null, got {max_connections}")
    error_format = str(c.get("error_format")).strip().lower()
    if error_format not in ERROR_FORMATS:
        raise ValueError(f"client.error_format must be one of {ERROR_FORMATS}, got {error_format!r}")
    return {
        "timeout_seconds": timeout,
        "max_connections": max_connections,
        "follow_redirects": bool(c.get("follow_redirects")),
        "error_format": error_format,
    }


def get_server_config(config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return dispatch API server config (host, port)."""
    s = _section(config, "server")
    return {"host": str(s.get("host")), "port": int(s.get("port"))}
