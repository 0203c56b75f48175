#!/usr/bin/env python3
"""Invoke one gateway operation directly (no server) and print the envelope as JSON.

Example: python scripts/call_operation.py get_sysinfo '{"MachineUuid": "abc-123", "Limit": 10}'
"""

import argparse
import json
import logging
import os
import sys

_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, _PROJECT_ROOT)

logging.basicConfig(
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    level=logging.INFO,
)
logging.getLogger("httpx").setLevel(logging.WARNING)


def main() -> int:
    from status_gateway.config.settings import get_status_config, read_config
    from status_gateway.gateway import Context, StatusClient, StatusRouter, UnknownOperationError

    parser = argparse.ArgumentParser(description="Call one status gateway operation")
    parser.add_argument("operation", help="Operation name, e.g. get_machines")
    parser.add_argument("params", nargs="?", default="{}", help="Raw JSON parameters")
    parser.add_argument("--config", default=None, help="Path to config.yaml")
    parser.add_argument("--status-url", default=None, help="Override status.url from config")
    args = parser.parse_args()

    config, _ = read_config(args.config)
    ctx = Context(status_url=(args.status_url or get_status_config(config)["url"]).rstrip("/"))
    with StatusClient.from_config(config) as client:
        router = StatusRouter(client)
        try:
            resp = router.dispatch(args.operation, ctx, args.params)
        except UnknownOperationError:
            print(f"Unknown operation {args.operation!r}; known: {', '.join(sorted(router.get_routes()))}", file=sys.stderr)
            return 2
    print(json.dumps(resp.to_dict(), indent=2))
    return 1 if resp.error else 0


if __name__ == "__main__":
    sys.exit(main())
