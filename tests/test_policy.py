"""Tests for the guessing policy gate."""

import logging

import pytest

from guesser.config import PolicyConfig
from guesser.game.policy import FALLBACK_QUESTION, enforce
from guesser.game.state import GameState, GuessDecision, QuestionDecision


def guess(confidence: float, prompt: str = "Am I right? Is it Mario?") -> GuessDecision:
    return GuessDecision(character="Mario", confidence=confidence, confirmation_prompt=prompt)


class TestEnforce:
    """Test enforce()."""

    @pytest.mark.parametrize("count", [0, 1, 10, 19])
    def test_too_early_downgraded(self, count):
        """Test confident guesses before the minimum become questions."""
        decision = enforce(guess(0.999), GameState(question_count=count))
        assert isinstance(decision, QuestionDecision)
        assert decision.text == "Am I right? Is it Mario?"

    @pytest.mark.parametrize("confidence", [0.0, 0.5, 0.8, 0.979])
    def test_low_confidence_downgraded(self, confidence):
        """Test unsure guesses become questions even late in the game."""
        decision = enforce(guess(confidence), GameState(question_count=25))
        assert isinstance(decision, QuestionDecision)

    @pytest.mark.parametrize("count,confidence", [(20, 0.98), (20, 1.0), (35, 0.99)])
    def test_compliant_guess_unchanged(self, count, confidence):
        """Test guesses meeting both rules pass through unchanged."""
        original = guess(confidence)
        assert enforce(original, GameState(question_count=count)) == original

    def test_question_passes_through(self):
        """Test questions are never rewritten."""
        question = QuestionDecision(text="Is it a plumber?")
        assert enforce(question, GameState(question_count=3)) is question

    def test_fallback_when_prompt_empty(self):
        """Test a downgraded guess without prompt gets the fallback question."""
        decision = enforce(guess(0.5, prompt=""), GameState(question_count=25))
        assert decision == QuestionDecision(text=FALLBACK_QUESTION)
        assert decision.text == "Please continue with a question."

    def test_fallback_when_prompt_blank(self):
        """Test whitespace-only prompts count as empty."""
        decision = enforce(guess(0.5, prompt="   "), GameState(question_count=25))
        assert decision.text == FALLBACK_QUESTION

    def test_custom_policy(self):
        """Test thresholds come from the supplied policy."""
        policy = PolicyConfig(min_questions=5, confidence_threshold=0.7)
        assert isinstance(enforce(guess(0.75), GameState(question_count=5), policy), GuessDecision)
        assert isinstance(enforce(guess(0.75), GameState(question_count=4), policy), QuestionDecision)
        assert isinstance(enforce(guess(0.65), GameState(question_count=9), policy), QuestionDecision)

    def test_does_not_mutate_state(self):
        """Test the gate leaves the state alone."""
        state = GameState(question_count=3)
        enforce(guess(0.99), state)
        assert state == GameState(question_count=3)

    def test_downgrade_logged(self, caplog):
        """Test each downgrade is logged with its reason."""
        with caplog.at_level(logging.INFO, logger="guesser.game.policy"):
            enforce(guess(0.999), GameState(question_count=5))
            enforce(guess(0.5), GameState(question_count=25))

        messages = [record.getMessage() for record in caplog.records]
        assert messages == [
            "Downgrading guess 'Mario' (confidence=1.00, questions=5): too few questions",
            "Downgrading guess 'Mario' (confidence=0.50, questions=25): confidence below threshold",
        ]
