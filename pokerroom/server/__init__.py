"""
PokerRoom Server - FastAPI driver layer
"""

from pokerroom.server.app import app, create_app

__all__ = ["app", "create_app"]
