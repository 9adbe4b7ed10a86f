"""Shared test helpers."""

import pytest

from guesser.game.state import GameState, UserResponse
from guesser.llm.client import GenerationConfig, GenerationResult, ReasoningClient


class ScriptedClient(ReasoningClient):
    """Reasoning client that replays canned replies (or raises canned errors)."""

    provider = "scripted"

    def __init__(self, replies=None, api_key: str | None = "test-key"):
        super().__init__("scripted-model", api_key=api_key)
        self.replies = list(replies or [])
        self.prompts: list[str] = []

    async def agenerate(self, prompt: str, config: GenerationConfig | None = None) -> GenerationResult:
        self.prompts.append(prompt)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return GenerationResult(content=reply, model=self.model)


def answered_state(count: int) -> GameState:
    """State after ``count`` questions were asked and all answered."""
    return GameState(
        current_question=f"Question {count}?",
        question_count=count,
        game_over=False,
        user_responses=[
            UserResponse(question=f"Question {i}?", answer="no") for i in range(1, count + 1)
        ],
    )


@pytest.fixture
def scripted_client():
    return ScriptedClient()
