"""
LLM prompt templates.

  - PROMPT_INTERPRET_QUERY  free-text contact request -> interpretation JSON
  - followup prompts        saved contact + context -> channel-specific draft
"""

from .interpretation import PROMPT_INTERPRET_QUERY, build_interpretation_input
from .followup import get_followup_instructions, get_followup_input

__all__ = [
    "PROMPT_INTERPRET_QUERY",
    "build_interpretation_input",
    "get_followup_instructions",
    "get_followup_input",
]
