from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings
from .routers import rooms as rooms_router
from .state import ServerState
from .transport import open_relay_endpoint

# -----------------------------
# FastAPI app factory
# -----------------------------


def create_app(settings: Optional[Settings] = None, state: Optional[ServerState] = None) -> FastAPI:
    """Build the monitoring app.

    Without an explicit *state* the lifespan binds the UDP relay socket on
    the running loop and exposes its state to the routers; the socket is
    closed on shutdown.
    """
    settings = settings or Settings.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        transport = None
        if getattr(app.state, "relay", None) is None:
            transport, app.state.relay = await open_relay_endpoint(
                settings.udp_host,
                settings.udp_port,
                max_code_attempts=settings.max_code_attempts,
            )
        try:
            yield
        finally:
            if transport is not None:
                transport.close()

    app = FastAPI(title="Qute Fighters Relay", lifespan=lifespan)
    app.state.settings = settings
    app.state.relay = state

    # Read-only endpoints; open to any dashboard origin.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    app.include_router(rooms_router.router)
    return app


app = create_app()

__all__ = ["app", "create_app"]
