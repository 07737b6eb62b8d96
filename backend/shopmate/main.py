"""
ShopMate assistant API.

WHAT: ASGI app serving the chat widget backend
WHY: Widgets talk to one process holding their conversations in memory
HOW: create_app() wires logging, CORS, error handlers, the v1 router and a
     background sweep that evicts idle conversations
"""

import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.config import settings
from .core.conversation import conversation_manager, sweep_stale_conversations
from .utils.logger import setup_logging, get_logger
from .middleware.error_handler import register_exception_handlers
from .api.v1.router import api_router

setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Run the stale-conversation sweep while the app is up.

    Conversations are in-memory only, so shutdown drops whatever is left.
    """
    policy = settings.get_negotiation_policy()
    logger.info(
        f"{settings.APP_NAME} v{settings.APP_VERSION} up: "
        f"discount {policy.base_percent}+{policy.increment_percent}/round "
        f"capped at {policy.max_discount_percent}%, "
        f"languages={settings.get_supported_languages()}"
    )

    sweeper = asyncio.create_task(
        sweep_stale_conversations(
            conversation_manager, settings.CONVERSATION_CLEANUP_INTERVAL_SECONDS
        )
    )
    app.state.sweeper = sweeper

    try:
        yield
    finally:
        sweeper.cancel()
        try:
            await sweeper
        except asyncio.CancelledError:
            pass
        logger.info(f"Shutting down; discarding {len(conversation_manager)} conversation(s)")
        conversation_manager.clear()


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Shopping-assistant chat: keyword routing and scripted bargaining",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins_list(),
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(api_router)

    @app.get("/")
    async def root():
        return {
            "app": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "status": "running",
            "docs": "/docs",
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("shopmate.main:app", host="0.0.0.0", port=8000, reload=settings.DEBUG)
