"""Response parsing for reasoning service replies.

The service is asked for a bare JSON object but often wraps it in a code
fence, surrounds it with prose, or writes loose keys. Extraction runs an
ordered chain of strategies and the first one that finds a candidate wins:

1. A fenced block labelled ``json``
2. Any fenced block
3. The first ``{...}`` span in the text

The candidate is then normalized and parsed. Anything that still does not
describe a question or a guess raises FormatError.
"""

import json
import logging
import re
from typing import Callable, Optional

from pydantic import ValidationError

from ..errors import FormatError
from ..game.state import Decision, GuessDecision, QuestionDecision

logger = logging.getLogger(__name__)

_LABELED_FENCE = re.compile(r"```json\s*(.*?)```", re.DOTALL | re.IGNORECASE)
_ANY_FENCE = re.compile(r"```[\w-]*\s*(.*?)```", re.DOTALL)
_BRACE_SPAN = re.compile(r"\{.*?\}", re.DOTALL)

_FENCE_MARKER = re.compile(r"```(?:json)?", re.IGNORECASE)
_WHITESPACE = re.compile(r"\s+")
# key: / 'key': / "key': at the start of an object or after a comma
_LOOSE_KEY = re.compile(r"([{,]\s*)['\"]?([A-Za-z0-9_]+)['\"]?\s*:")


def _from_labeled_fence(text: str) -> Optional[str]:
    match = _LABELED_FENCE.search(text)
    return match.group(1) if match else None


def _from_any_fence(text: str) -> Optional[str]:
    match = _ANY_FENCE.search(text)
    return match.group(1) if match else None


def _from_brace_span(text: str) -> Optional[str]:
    match = _BRACE_SPAN.search(text)
    return match.group(0) if match else None


EXTRACTION_STRATEGIES: list[tuple[str, Callable[[str], Optional[str]]]] = [
    ("labeled_fence", _from_labeled_fence),
    ("any_fence", _from_any_fence),
    ("brace_span", _from_brace_span),
]


def locate_json(raw_response: str) -> str:
    """Return the JSON-shaped substring of a reply.

    Raises:
        FormatError: If no strategy finds a candidate
    """
    for name, strategy in EXTRACTION_STRATEGIES:
        candidate = strategy(raw_response)
        if candidate is not None:
            logger.debug(f"Located reply JSON via {name}")
            return candidate
    raise FormatError("No JSON object found in reasoning service reply")


def normalize_json(candidate: str) -> str:
    """Strip fences, collapse whitespace and double-quote loose keys."""
    text = _FENCE_MARKER.sub("", candidate).strip()
    text = _WHITESPACE.sub(" ", text)
    return _LOOSE_KEY.sub(r'\1"\2":', text)


def parse_payload(candidate: str) -> dict:
    """Parse a located candidate into a dict.

    Strictly valid JSON is accepted as-is so that string values are never
    rewritten; only when that fails are loose keys coerced.
    """
    collapsed = _WHITESPACE.sub(" ", _FENCE_MARKER.sub("", candidate).strip())
    try:
        payload = json.loads(collapsed)
    except json.JSONDecodeError:
        try:
            payload = json.loads(normalize_json(candidate))
        except json.JSONDecodeError as e:
            raise FormatError(f"Reply JSON could not be parsed: {e.msg}") from e

    if not isinstance(payload, dict):
        raise FormatError("Reply JSON is not an object")
    return payload


def _read_confidence(payload: dict) -> float:
    value = payload.get("confidence")
    if value is None:
        raise FormatError("Guess is missing confidence")
    if isinstance(value, bool):
        raise FormatError("Guess confidence is not a number")
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise FormatError("Guess confidence is not a number") from e


def to_decision(payload: dict) -> Decision:
    """Map a parsed reply object onto a Decision."""
    kind = payload.get("type")

    if kind == "question":
        text = payload.get("question")
        if not isinstance(text, str) or not text.strip():
            raise FormatError("Question reply has no question text")
        return QuestionDecision(text=text.strip())

    if kind == "guess":
        character = payload.get("character")
        if not isinstance(character, str) or not character.strip():
            raise FormatError("Guess reply has no character")
        prompt = payload.get("question")
        try:
            return GuessDecision(
                character=character.strip(),
                confidence=_read_confidence(payload),
                confirmation_prompt=prompt.strip() if isinstance(prompt, str) else "",
            )
        except ValidationError as e:
            raise FormatError("Guess confidence must be between 0 and 1") from e

    raise FormatError(f"Unrecognized reply type: {kind!r}")


def extract_decision(raw_response: str) -> Decision:
    """Parse a raw reasoning service reply into a Decision.

    Args:
        raw_response: Reply text exactly as returned by the service

    Returns:
        QuestionDecision or GuessDecision

    Raises:
        FormatError: If the reply cannot be coerced into a known decision
    """
    return to_decision(parse_payload(locate_json(raw_response)))
