"""Personality and chat text generators."""

from .anthropic_client import AnthropicTextGenerator
from .base import ChatRole, ChatTurn, GeneratorFailure, TextGenerator

__all__ = [
    "AnthropicTextGenerator",
    "ChatRole",
    "ChatTurn",
    "GeneratorFailure",
    "TextGenerator",
]
