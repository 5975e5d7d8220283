# tests/test_settings.py
"""Tests for behavioral Settings.

Settings is a plain BaseModel (no env var reading); env vars and YAML are
read by faqrag.config at the application layer.
"""

import pytest
from pydantic import ValidationError

from faqrag.settings import RELEVANCE_PROFILES, Settings


class TestSettings:
    def test_default_settings(self):
        settings = Settings()
        assert settings.chunk_size == 320
        assert settings.chunk_overlap == 60
        assert settings.fallback_dimension == 768
        assert settings.embedding_batch_size == 16
        assert settings.top_k == 5
        assert settings.min_score == 0.15
        assert settings.cosine_weight == 0.8
        assert settings.lexical_weight == 0.2
        assert settings.lexical_cap == 5
        assert settings.extractive_chunks == 3
        assert settings.temperature == 0.2
        assert settings.fallback_model is None

    def test_settings_with_custom_values(self):
        settings = Settings(top_k=3, min_score=0.25, fallback_model="openai/gpt-5-mini")
        assert settings.top_k == 3
        assert settings.min_score == 0.25
        assert settings.fallback_model == "openai/gpt-5-mini"

    @pytest.mark.parametrize(
        "field,value",
        [("top_k", 0), ("embedding_batch_size", 0), ("lexical_cap", 0), ("cosine_weight", -0.1)],
    )
    def test_invalid_values(self, field, value):
        with pytest.raises(ValidationError):
            Settings(**{field: value})

    def test_weights_must_not_both_be_zero(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Settings(cosine_weight=0.0, lexical_weight=0.0)

    def test_with_profile_strict(self):
        settings = Settings.with_profile("strict")
        assert settings.min_score == RELEVANCE_PROFILES["strict"]["min_score"]

    def test_with_profile_lenient(self):
        settings = Settings.with_profile("lenient")
        assert settings.min_score == RELEVANCE_PROFILES["lenient"]["min_score"]
        assert settings.min_score < Settings.with_profile("strict").min_score

    def test_with_profile_with_overrides(self):
        settings = Settings.with_profile("lenient", top_k=2, min_score=0.5)
        assert settings.top_k == 2  # from override
        assert settings.min_score == 0.5  # override beats profile
        assert settings.cosine_weight == RELEVANCE_PROFILES["lenient"]["cosine_weight"]

    def test_with_profile_invalid_raises(self):
        with pytest.raises(ValueError, match="Unknown profile"):
            Settings.with_profile("invalid")  # type: ignore[arg-type]
