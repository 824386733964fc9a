"""
Chat model construction shared by the LLM-backed collaborators.
"""

import os
from typing import Any, Optional

from langchain.chat_models import init_chat_model

from quickwatch.config import config


# Environment variable each LangChain provider integration reads its key from
PROVIDER_KEY_ENV = {
    "google_genai": "GOOGLE_API_KEY",
    "groq": "GROQ_API_KEY",
}


def resolve_api_key(provider: str, api_key: Optional[str] = None) -> str:
    """
    Find the API key for a provider and export it for the LangChain integration.

    Raises:
        ValueError: No key is configured
    """
    env_name = PROVIDER_KEY_ENV.get(provider)
    if env_name is None:
        raise ValueError(f"Unsupported LLM provider: {provider}")

    key = api_key or config.api_key_for(provider) or os.getenv(env_name)
    if not key:
        raise ValueError(f"API key for '{provider}' is required. Set it in .env file or pass directly.")

    os.environ[env_name] = key
    return key


def create_chat_model(model: str, provider: str, temperature: float, max_tokens: int):
    return init_chat_model(
        model=model,
        model_provider=provider,
        temperature=temperature,
        max_tokens=max_tokens,
    )


def message_text(message: Any) -> str:
    """Plain text of a chat model reply; content may be a string or a list of parts."""
    content = getattr(message, "content", message)
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and isinstance(part.get("text"), str):
                parts.append(part["text"])
        return "".join(parts)
    return str(content)
