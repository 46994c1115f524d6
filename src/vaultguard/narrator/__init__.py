from .http import HttpNarrator
from .prompt import build_prompt

__all__ = ["HttpNarrator", "build_prompt"]
