"""Game State - the record of one guessing session, owned by the client.

The server keeps no copy between turns. Wire names are camelCase so the
state round-trips unchanged through the browser client.
"""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

Answer = Literal["yes", "no", "unsure"]


class UserResponse(BaseModel):
    """One answered question."""

    question: str
    answer: Answer

    def to_prompt(self) -> str:
        return f'Q: "{self.question}"\nA: "{self.answer}"'


class GameState(BaseModel):
    """Progress of a single game, threaded through every turn."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    current_question: str = ""
    question_count: int = Field(default=0, ge=0)
    guessed_character: Optional[str] = None
    confidence: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    game_over: bool = False
    user_responses: list[UserResponse] = Field(default_factory=list)

    @model_validator(mode="after")
    def _guess_fields_paired(self) -> "GameState":
        if (self.guessed_character is None) != (self.confidence is None):
            raise ValueError("guessedCharacter and confidence must be set together")
        return self

    @property
    def is_bootstrap(self) -> bool:
        """True before the opening question has been issued."""
        return self.question_count == 0

    def advance(self, decision: "Decision") -> "GameState":
        """Return a copy with the decision folded in and the counter advanced."""
        updated = self.model_copy(deep=True)
        updated.question_count = self.question_count + 1
        updated.current_question = decision.display_text
        if isinstance(decision, GuessDecision):
            updated.guessed_character = decision.character
            updated.confidence = decision.confidence
        return updated

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)


class QuestionDecision(BaseModel):
    """Ask the user another yes/no question."""

    model_config = ConfigDict(populate_by_name=True)

    type: Literal["question"] = "question"
    text: str = Field(alias="question")

    @property
    def display_text(self) -> str:
        return self.text


class GuessDecision(BaseModel):
    """Commit to a character and ask the user to confirm it."""

    model_config = ConfigDict(populate_by_name=True)

    type: Literal["guess"] = "guess"
    character: str
    confidence: float = Field(ge=0.0, le=1.0)
    confirmation_prompt: str = Field(default="", alias="question")

    @property
    def display_text(self) -> str:
        return self.confirmation_prompt or f"Am I right? Is it {self.character}?"


Decision = Annotated[Union[QuestionDecision, GuessDecision], Field(discriminator="type")]


def decision_to_wire(decision: Decision) -> dict:
    """Serialize a decision using the reply field names (``question``)."""
    return decision.model_dump(by_alias=True)
