"""Turn orchestration: one request, one decision, one updated state."""

import logging
from dataclasses import dataclass
from typing import Optional

from ..config import PolicyConfig
from ..errors import MissingInputError
from ..llm.client import ReasoningClient
from ..prompts.builder import build_prompt
from ..prompts.parser import extract_decision
from .policy import enforce
from .state import Decision, GameState, QuestionDecision, decision_to_wire

logger = logging.getLogger(__name__)

OPENING_QUESTION = "Is your character a real person (as opposed to fictional)?"


@dataclass
class TurnResult:
    """Decision shown to the user and the state the client keeps."""

    decision: Decision
    state: GameState

    def to_dict(self) -> dict:
        return {
            "decision": decision_to_wire(self.decision),
            "updatedGameState": self.state.to_wire(),
        }


class TurnOrchestrator:
    """Runs a turn against the reasoning service.

    Holds no game state; every call is a function of the submitted state plus
    one reasoning call, so a failed turn can be retried with the same input.
    """

    def __init__(self, client: ReasoningClient, policy: PolicyConfig | None = None):
        self.client = client
        self.policy = policy or PolicyConfig()

    async def take_turn(self, state: Optional[GameState]) -> TurnResult:
        """Produce the next decision for a game.

        Args:
            state: Game state as submitted by the client (never mutated)

        Returns:
            TurnResult with the enforced decision and a new state

        Raises:
            MissingInputError: If no state was supplied
            ConfigurationError: If the reasoning credential is missing
            UpstreamError: If the reasoning call failed or returned no text
            FormatError: If the reply could not be parsed into a decision
        """
        if state is None:
            raise MissingInputError("Missing gameState")
        self.client.ensure_configured()

        if state.is_bootstrap:
            decision = QuestionDecision(text=OPENING_QUESTION)
            return TurnResult(decision=decision, state=state.advance(decision))

        prompt = build_prompt(state, self.policy)
        result = await self.client.agenerate(prompt)
        candidate = extract_decision(result.content)

        # The gate judges the turn this decision will occupy
        upcoming = state.model_copy(update={"question_count": state.question_count + 1})
        decision = enforce(candidate, upcoming, self.policy)

        logger.debug(f"Turn {upcoming.question_count}: {decision.type} via {self.client.provider}")
        return TurnResult(decision=decision, state=state.advance(decision))
