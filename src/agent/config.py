"""Agent configuration helpers."""

import logging

from common.config.env import get_env_int, get_env_str

logger = logging.getLogger(__name__)

DEFAULT_PROVIDER = "anthropic"
DEFAULT_MAX_TOKENS = 1500


def get_llm_provider() -> str:
    return (get_env_str("LLM_PROVIDER", DEFAULT_PROVIDER) or DEFAULT_PROVIDER).strip().lower()


def get_max_tokens() -> int:
    """Return the reply token cap, falling back to the default on bad input."""
    try:
        value = get_env_int("LLM_MAX_TOKENS", None)
    except ValueError as exc:
        logger.warning("Invalid LLM_MAX_TOKENS: %s", exc)
        return DEFAULT_MAX_TOKENS

    if value is None or value <= 0:
        return DEFAULT_MAX_TOKENS
    return value
