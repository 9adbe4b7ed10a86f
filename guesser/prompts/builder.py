"""Prompt Builder - renders a game state into the reasoning service prompt.

Combines Game Contract + transcript + the reply formats allowed this turn.
"""

from ..config import PolicyConfig
from ..game.state import GameState
from .contract import GAME_CONTRACT, GUESS_FORMAT, QUESTION_FORMAT, STRICT_JSON_NOTE


def format_percent(threshold: float) -> str:
    """Render a 0-1 threshold as a percentage (0.98 -> "98")."""
    return f"{threshold * 100:g}"


def build_transcript(state: GameState) -> str:
    """Render the answered questions in the order they were asked."""
    if not state.user_responses:
        return "(no questions answered yet)"
    return "\n\n".join(response.to_prompt() for response in state.user_responses)


def build_output_instruction(state: GameState, policy: PolicyConfig) -> str:
    """Describe the reply shapes the policy allows at this turn."""
    if state.question_count >= policy.min_questions:
        percent = format_percent(policy.confidence_threshold)
        return (
            f"If you are at least {percent}% sure, return a guess in JSON format:\n"
            f"{GUESS_FORMAT}\n"
            "If you are not at that level of confidence, "
            "return a yes/no question in JSON format:\n"
            f"{QUESTION_FORMAT}\n"
            f"{STRICT_JSON_NOTE}"
        )
    return (
        "Return a yes/no question in JSON format:\n"
        f"{QUESTION_FORMAT}\n"
        f"{STRICT_JSON_NOTE}"
    )


def build_prompt(state: GameState, policy: PolicyConfig | None = None) -> str:
    """Build the complete prompt for one turn.

    Args:
        state: Game state as submitted by the client
        policy: Guessing policy stated in the rules. Defaults to PolicyConfig()

    Returns:
        Complete prompt string
    """
    policy = policy or PolicyConfig()
    parts = [
        GAME_CONTRACT.format(
            min_questions=policy.min_questions,
            confidence_percent=format_percent(policy.confidence_threshold),
        ),
        "User responses so far:",
        build_transcript(state),
        f"Questions asked: {state.question_count}.",
    ]

    # A finished game asks for no further move
    if not state.game_over:
        parts.append(build_output_instruction(state, policy))

    return "\n".join(parts)
