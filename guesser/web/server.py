"""FastAPI server exposing the guessing engine."""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from ..config import AppConfig, get_config
from ..errors import GuesserError
from ..game.state import GameState
from ..game.turn import TurnOrchestrator
from ..llm.client import ReasoningClient, create_client
from .timing import get_tracker, timed_async

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class TurnRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    game_state: Optional[GameState] = Field(default=None, alias="gameState")


def create_app(
    config: AppConfig | None = None,
    client: ReasoningClient | None = None,
) -> FastAPI:
    """Build the application.

    Args:
        config: Application config. Defaults to the global config
        client: Reasoning client. Defaults to one built from ``config.llm``
    """
    config = config or get_config()
    client = client or create_client(config.llm)
    orchestrator = TurnOrchestrator(client, config.policy)

    app = FastAPI(
        title="Character Guesser",
        description="Yes/no deduction game driven by a reasoning service",
        version="0.1.0",
    )
    app.state.config = config
    app.state.orchestrator = orchestrator

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(GuesserError)
    async def handle_turn_error(request: Request, exc: GuesserError):
        logger.warning(f"Turn failed ({exc.kind}): {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.get("/api/status")
    async def get_status():
        """Get server and reasoning service status."""
        return {
            "status": "online",
            "provider": client.provider,
            "model": client.model,
            "ai_configured": client.is_configured(),
            "min_questions": config.policy.min_questions,
            "confidence_threshold": config.policy.confidence_threshold,
        }

    @app.get("/api/timing")
    async def get_timing():
        """Get latency statistics for turns."""
        return {"stats": get_tracker().get_all_stats()}

    @app.post("/api/turn")
    async def take_turn(payload: Optional[TurnRequest] = None):
        """Run one turn for the submitted game state."""
        state = payload.game_state if payload else None
        async with timed_async("turn", provider=client.provider):
            result = await orchestrator.take_turn(state)
        return result.to_dict()

    if client.is_configured():
        logger.info(f"Reasoning service: {client.model} ({client.provider})")
    else:
        logger.warning(
            f"Reasoning service not configured - set {client.api_key_env}"
        )

    return app


app = create_app()
