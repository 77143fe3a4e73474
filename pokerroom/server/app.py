"""
FastAPI Application Entry Point for PokerRoom.

This module creates and configures the FastAPI application with:
- HTTP routes driving the rules engine
- An in-memory registry of independent rooms
- CORS middleware for browser clients
"""

import logging
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pokerroom import __version__
from pokerroom.server.manager import RoomManager
from pokerroom.server.routes import router

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def create_app(seed: Optional[int] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        seed: Seeds every room's shuffle source, for reproducible sessions

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title="PokerRoom",
        description="Texas Hold'em rules engine over HTTP",
        version=__version__,
    )
    # UI clients are served from elsewhere
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.manager = RoomManager(seed=seed)
    app.include_router(router)

    @app.get("/health")
    async def health():
        return {"status": "ok", "rooms": len(app.state.manager.rooms)}

    logger.info(f"PokerRoom app created (seed={seed})")
    return app


# Create the application instance
app = create_app()
