"""PromptCraft: rule-based prompt enhancement with optional LLM polish."""

__version__ = "1.0.0"
__author__ = "PromptCraft Team"

from .engine.models import EnhancedPrompt, EnhancementOptions, Intent, RequestType
from .engine.normalizer import normalize
from .engine.orchestrator import EnhancementOrchestrator, classify, enhance

__all__ = [
    "EnhancedPrompt",
    "EnhancementOptions",
    "EnhancementOrchestrator",
    "Intent",
    "RequestType",
    "classify",
    "enhance",
    "normalize",
]
