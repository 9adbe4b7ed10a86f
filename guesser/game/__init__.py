"""Game model and guessing policy."""

from .state import (
    Answer,
    Decision,
    GameState,
    GuessDecision,
    QuestionDecision,
    UserResponse,
)
from .policy import FALLBACK_QUESTION, enforce

__all__ = [
    "Answer", "Decision", "GameState", "GuessDecision", "QuestionDecision",
    "UserResponse", "FALLBACK_QUESTION", "enforce",
]
