"""Provider configurations for faqrag."""

from faqrag.configuration.providers.litellm import LiteLLMProvider

__all__ = ["LiteLLMProvider"]
