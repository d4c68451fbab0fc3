"""Caller-layer tools wrapping the enhancement engine."""

from .enhance_prompt import enhance_prompt_tool

__all__ = ["enhance_prompt_tool"]
