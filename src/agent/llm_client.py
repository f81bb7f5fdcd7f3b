"""LLM client factory for the dashboard assistant.

Supports Anthropic (Claude) and OpenAI chat models through LangChain.
"""

from typing import Optional

from dotenv import load_dotenv
from langchain_core.language_models.chat_models import BaseChatModel

from agent.config import get_llm_provider, get_max_tokens
from common.config.env import get_env_str

load_dotenv()

SUPPORTED_MODELS = {
    "anthropic": ["claude-sonnet-4-20250514", "claude-3-5-sonnet-20241022"],
    "openai": ["gpt-4o", "gpt-4o-mini"],
}

_PLACEHOLDER_KEYS = {"<REPLACE_ME>", "changeme", "your_api_key_here"}


def _require_api_key(env_var: str) -> None:
    key = get_env_str(env_var)
    if not key or key.strip() in _PLACEHOLDER_KEYS or key.startswith("<"):
        raise ValueError(
            f"{env_var} is missing or set to a placeholder value. "
            "Please update your .env file with a valid API key."
        )


def get_llm_client(
    provider: Optional[str] = None,
    model: Optional[str] = None,
    temperature: float = 0,
) -> BaseChatModel:
    """Build a chat model for the requested provider.

    Args:
        provider: 'anthropic' or 'openai'. Defaults to LLM_PROVIDER or 'anthropic'.
        model: Model name. Defaults to LLM_MODEL or the provider's first model.
        temperature: Sampling temperature.

    Returns:
        BaseChatModel: LangChain chat model instance.

    Raises:
        ValueError: If the provider is unsupported or its API key is missing.
    """
    resolved_provider = (provider or get_llm_provider()).lower()
    if resolved_provider not in SUPPORTED_MODELS:
        raise ValueError(
            f"Unsupported provider: {resolved_provider}. "
            f"Supported: {list(SUPPORTED_MODELS.keys())}"
        )

    resolved_model = model or get_env_str("LLM_MODEL") or SUPPORTED_MODELS[resolved_provider][0]

    if resolved_provider == "anthropic":
        _require_api_key("ANTHROPIC_API_KEY")
        from langchain_anthropic import ChatAnthropic

        return ChatAnthropic(
            model=resolved_model, temperature=temperature, max_tokens=get_max_tokens()
        )

    _require_api_key("OPENAI_API_KEY")
    from langchain_openai import ChatOpenAI

    return ChatOpenAI(model=resolved_model, temperature=temperature, max_tokens=get_max_tokens())
