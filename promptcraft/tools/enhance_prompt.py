"""Enhance prompt tool implementation."""

import hashlib
import json
import logging
import os
from typing import Any, Dict, Optional

from ..engine.models import EnhancementOptions, Length
from ..engine.orchestrator import EnhancementOrchestrator, get_orchestrator
from ..generators.base import TONE_GUIDANCE, model_note
from ..utils.exceptions import LLMError, StoreError
from ..utils.llm_client import LLMClient
from ..utils.store import KeyValueStore

logger = logging.getLogger(__name__)

LENGTH_GUIDANCE = {
    Length.CONCISE: "Keep the enhanced prompt concise and to the point (50-100 words).",
    Length.BALANCED: "Create a balanced prompt with moderate detail (100-200 words).",
    Length.DETAILED: "Create a comprehensive prompt with thorough instructions (200-400 words).",
}


def build_system_prompt(options: EnhancementOptions) -> str:
    """Expert prompt-engineer instructions sent to the LLM."""
    return f"""You are an expert prompt engineer. Transform the user's rough idea into a clear, effective prompt for AI models.

RULES:
1. Keep the user's original intent and meaning
2. Make it specific and actionable
3. Add helpful context, constraints and the desired output format
4. Fix grammar and spelling
5. Add a role for the model where it helps
6. If the user mentions images/photos, preserve that context
7. Enhance, don't completely rewrite; avoid unnecessary complexity

{TONE_GUIDANCE[options.tone]}
{LENGTH_GUIDANCE[options.length]}
{model_note(options.model)}

Output the enhanced prompt directly - no explanations, no meta-text."""


def build_user_prompt(prompt: str, template: str) -> str:
    return (
        f'Enhance this prompt:\n\n"{prompt}"\n\n'
        "Use the following structure as a guide; keep the sections that fit and drop "
        f"the rest:\n\n{template}"
    )


def cache_key(prompt: str, options: EnhancementOptions, use_llm: bool) -> str:
    key_payload = {
        "prompt": prompt,
        "tone": options.tone.value,
        "length": options.length.value,
        "model": options.model,
        "detail_level": options.detail_level.value,
        "use_llm": use_llm,
    }
    key_str = json.dumps(key_payload, sort_keys=True, ensure_ascii=False)
    return f"enhance:{hashlib.sha256(key_str.encode('utf-8')).hexdigest()}"


async def enhance_prompt_tool(
    arguments: Dict[str, Any],
    llm_client: Optional[LLMClient] = None,
    cache: Optional[KeyValueStore] = None,
    orchestrator: Optional[EnhancementOrchestrator] = None,
) -> Dict[str, Any]:
    """Enhance a prompt with the template engine and, optionally, an LLM.

    Args:
        arguments: ``prompt`` plus optional ``tone``, ``length``, ``model``,
            ``detail_level``/``detailLevel`` and ``use_llm``/``useLlm``
        llm_client: LLM client; skipped when None or unconfigured
        cache: Store used as a result cache; skipped when None
        orchestrator: Engine to use; defaults to the shared instance

    Returns:
        Dictionary with enhancedPrompt, originalPrompt and metadata

    Raises:
        PromptValidationError: empty or oversized prompt
    """
    engine = orchestrator or get_orchestrator()
    original = engine.validate(arguments.get("prompt"))
    options = EnhancementOptions.from_mapping(arguments)
    use_llm = bool(arguments.get("use_llm", arguments.get("useLlm", True)))
    wants_llm = use_llm and llm_client is not None and llm_client.available

    cache_enabled = cache is not None and os.getenv("CACHE_ENABLED", "true").lower() == "true"
    key = cache_key(original, options, wants_llm)
    if cache_enabled:
        try:
            cached = await cache.get(key)
        except StoreError as e:
            logger.error("Cache get error: %s", e)
            cached = None
        if cached:
            logger.info("Cache hit for prompt enhancement")
            cached["metadata"]["source"] = "cache"
            return cached

    enhanced = engine.enhance(original, options)
    text = enhanced.text
    source = "template"
    model = None

    if wants_llm:
        try:
            text = await llm_client.generate(
                build_system_prompt(options), build_user_prompt(original, enhanced.text)
            )
            source = "llm"
            model = llm_client.model
        except LLMError as e:
            logger.warning("LLM enhancement failed, using template: %s", e)
            # Store the fallback as a template result so the next call retries the LLM.
            key = cache_key(original, options, False)

    result = enhanced.to_dict()
    result["enhancedPrompt"] = text
    result["originalPrompt"] = original
    result["metadata"].update(
        {"outputLength": len(text), "source": source, "model": model}
    )

    if cache_enabled:
        try:
            await cache.put(key, result, ttl=int(os.getenv("CACHE_TTL_SECONDS", "3600")))
        except StoreError as e:
            logger.error("Cache set error: %s", e)

    return result
