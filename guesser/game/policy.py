"""Guessing policy applied to every decision, whatever the model claims."""

import logging

from ..config import PolicyConfig
from .state import Decision, GameState, GuessDecision, QuestionDecision

logger = logging.getLogger(__name__)

FALLBACK_QUESTION = "Please continue with a question."


def enforce(
    decision: Decision,
    state: GameState,
    policy: PolicyConfig | None = None,
) -> Decision:
    """Downgrade a guess to a question when it breaks the policy.

    A guess is only allowed once ``state.question_count`` reaches
    ``policy.min_questions`` and its confidence reaches
    ``policy.confidence_threshold``. Questions pass through untouched.
    """
    policy = policy or PolicyConfig()
    if not isinstance(decision, GuessDecision):
        return decision

    too_early = state.question_count < policy.min_questions
    unsure = decision.confidence < policy.confidence_threshold
    if not (too_early or unsure):
        return decision

    reason = "too few questions" if too_early else "confidence below threshold"
    logger.info(
        f"Downgrading guess {decision.character!r} "
        f"(confidence={decision.confidence:.2f}, questions={state.question_count}): {reason}"
    )
    return QuestionDecision(text=decision.confirmation_prompt.strip() or FALLBACK_QUESTION)
