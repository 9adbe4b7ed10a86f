"""Game Contract - rules and reply formats sent to the reasoning service.

The rules block is always sent. Only the output shapes the policy allows at
the current turn are described, so the model is never offered the guess
format before it may use it.
"""

GAME_CONTRACT = """You are playing an Akinator-style guessing game.
Rules:
1. Ask strategic yes/no questions to narrow down the possibilities.
2. Do not guess until at least {min_questions} questions have been asked.
3. Only provide a guess if you are at least {confidence_percent}% confident."""


QUESTION_FORMAT = """{
  "type": "question",
  "question": "Your yes/no question here"
}"""

GUESS_FORMAT = """{
  "type": "guess",
  "character": "Your guessed character",
  "confidence": 0.X,
  "question": "Am I right? Is it [character]?"
}"""

STRICT_JSON_NOTE = "Reply with a single JSON object containing a \"type\" field and nothing else."
