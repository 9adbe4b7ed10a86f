"""Prompt contract, prompt building and reply parsing."""

from .contract import GAME_CONTRACT
from .builder import build_prompt
from .parser import extract_decision

__all__ = ["GAME_CONTRACT", "build_prompt", "extract_decision"]
