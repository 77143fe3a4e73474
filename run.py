#!/usr/bin/env python3
"""
PokerRoom - Server Startup Script

Usage:
    python run.py [--host HOST] [--port PORT] [--reload] [--seed SEED]
"""

import argparse
import uvicorn


def main():
    parser = argparse.ArgumentParser(description="PokerRoom Server")
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind to")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind to")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible shuffles")
    args = parser.parse_args()

    if args.seed is None:
        uvicorn.run(
            "pokerroom.server.app:app",
            host=args.host,
            port=args.port,
            reload=args.reload,
        )
    else:
        from pokerroom.server.app import create_app
        uvicorn.run(create_app(seed=args.seed), host=args.host, port=args.port)


if __name__ == "__main__":
    main()
