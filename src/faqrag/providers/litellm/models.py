"""Curated model constants for the LiteLLM provider.

Any valid LiteLLM model string works; these only help with autocomplete.
"""


class ChatModels:
    """Chat/completion models for answer generation (via LiteLLMClient)."""

    # OpenAI
    GPT_4O_MINI = "openai/gpt-4o-mini"
    GPT_41_MINI = "openai/gpt-4.1-mini"
    GPT_5_MINI = "openai/gpt-5-mini"

    # Anthropic
    CLAUDE_HAIKU_45 = "anthropic/claude-haiku-4-5-20251001"
    CLAUDE_SONNET_45 = "anthropic/claude-sonnet-4-5-20250929"

    # Google Gemini
    GEMINI_3_FLASH = "gemini/gemini-3-flash-preview"


# Tried after the configured model and the environment fallback, in this order.
BUILTIN_FALLBACK_MODELS: tuple[str, ...] = (
    ChatModels.GPT_4O_MINI,
    ChatModels.GPT_41_MINI,
)


class EmbeddingModels:
    """Embedding models for LiteLLMEmbeddingClient / ClientEmbedder."""

    # OpenAI
    TEXT_3_SMALL = "openai/text-embedding-3-small"
    TEXT_3_LARGE = "openai/text-embedding-3-large"

    # Google Gemini
    GEMINI_EMBEDDING_001 = "gemini/gemini-embedding-001"
