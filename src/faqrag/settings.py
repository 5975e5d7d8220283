# src/faqrag/settings.py
"""Behavioral settings for faqrag.

These settings tune retrieval and composition regardless of which LLM or
embedding provider is used. They are passed programmatically; the library
itself does not read environment variables. ``faqrag.config`` reads env vars
and YAML at the application layer and builds a Settings from them.

Admin-editable values (model, max_tokens, widget colors, allowed origins)
live in ``faqrag.models.AppSettings`` and the settings store instead.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator

# Scoring presets. The weights and threshold were tuned by hand; "strict"
# suits model embeddings, "lenient" suits the hash fallback on small sites.
RELEVANCE_PROFILES: dict[str, dict[str, float]] = {
    "strict": {
        "min_score": 0.18,
        "cosine_weight": 0.8,
        "lexical_weight": 0.2,
    },
    "lenient": {
        "min_score": 0.12,
        "cosine_weight": 0.8,
        "lexical_weight": 0.2,
    },
}


class Settings(BaseModel):
    """Behavioral settings for faqrag.

    Example:
        settings = Settings(top_k=3, min_score=0.2)

        # Or start from a relevance profile
        settings = Settings.with_profile("lenient")
    """

    # Segmentation
    chunk_size: int = Field(default=320, ge=1)
    chunk_overlap: int = Field(default=60, ge=0)

    # Embedding
    fallback_dimension: int = Field(default=768, ge=1)
    embedding_batch_size: int = Field(default=16, ge=1)

    # Ranking
    top_k: int = Field(default=5, ge=1)
    min_score: float = 0.15
    cosine_weight: float = Field(default=0.8, ge=0.0)
    lexical_weight: float = Field(default=0.2, ge=0.0)
    lexical_cap: int = Field(default=5, ge=1)

    # Answer composition
    extractive_chunks: int = Field(default=3, ge=1)
    summary_char_budget: int = Field(default=480, ge=80)
    temperature: float = 0.2
    fallback_model: str | None = None

    @model_validator(mode="after")
    def _check_weights(self) -> Settings:
        if self.cosine_weight + self.lexical_weight <= 0:
            raise ValueError("cosine_weight + lexical_weight must be positive")
        return self

    @classmethod
    def with_profile(
        cls,
        profile: Literal["strict", "lenient"],
        **overrides: Any,
    ) -> Settings:
        """Create Settings from a relevance profile.

        Args:
            profile: The relevance profile to use.
            **overrides: Additional settings to override profile defaults.

        Returns:
            Settings instance with profile values applied.
        """
        if profile not in RELEVANCE_PROFILES:
            raise ValueError(
                f"Unknown profile '{profile}'. "
                f"Available profiles: {list(RELEVANCE_PROFILES.keys())}"
            )

        profile_settings: dict[str, Any] = RELEVANCE_PROFILES[profile].copy()
        profile_settings.update(overrides)
        return cls(**profile_settings)
