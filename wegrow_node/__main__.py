# wegrow_node/__main__.py
"""
Entry point for running the WeGrow API as a module:
    python -m wegrow_node [--host 0.0.0.0] [--port 4000] [--db ./data/db.json]
                          [--config ./wegrow_config.yaml]
Env toggles:
  WEGROW_CONFIG   -> YAML config path
  WEGROW_DB_PATH  -> document path
  PORT            -> listen port
"""

from __future__ import annotations

import argparse

import uvicorn

from . import config
from .wegrow_api import create_app


def parse_args(argv=None):
    p = argparse.ArgumentParser(
        prog="wegrow-node",
        description="Run the WeGrow marketplace API",
    )
    p.add_argument("--config", default=None, help="Path to wegrow_config.yaml")
    p.add_argument("--host", default=None, help="Bind address (default from config: 0.0.0.0)")
    p.add_argument("--port", type=int, default=None, help="Port (default from config: 4000)")
    p.add_argument("--db", default=None, help="Path to the JSON document")
    return p.parse_args(argv)


def main(argv=None) -> None:
    args = parse_args(argv)
    cfg = config.load_config(path=args.config)
    if args.host:
        cfg["server"]["host"] = args.host
    if args.port:
        cfg["server"]["port"] = args.port
    if args.db:
        cfg["storage"]["path"] = args.db

    app = create_app(cfg)
    uvicorn.run(app, host=config.get_bind_host(cfg), port=config.get_bind_port(cfg))


if __name__ == "__main__":
    main()
