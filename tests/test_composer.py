# tests/test_composer.py
"""Tests for answer composition."""

from unittest.mock import MagicMock

import pytest

from faqrag.composer import (
    EXTRACTIVE_HEADER,
    SYSTEM_PROMPT,
    AnswerComposer,
    build_context,
    definition_topic,
    trim_to_sentence,
)
from faqrag.models import AppSettings, Chunk, RankedChunk
from faqrag.providers import LLMClient
from faqrag.settings import Settings


def ranked(content: str, url: str = "https://docs.example.com/a", title: str = "A", score=0.9):
    return RankedChunk(
        chunk=Chunk(source_url=url, title=title, content=content, embedding=[1.0]),
        score=score,
    )


PASSWORD_CHUNKS = [
    ranked(
        "You can reset your password from the account settings page. "
        "Passwords must contain at least twelve characters overall. "
        "Contact support if the reset link expires after one hour.",
        url="https://docs.example.com/account",
        title="Account",
    ),
    ranked(
        "Administrators can reset password for any member of the workspace.",
        url="https://docs.example.com/admin",
        title="Admin",
        score=0.7,
    ),
]


@pytest.fixture
def llm_client():
    return MagicMock(spec=LLMClient)


class TestModelMode:
    def test_returns_stripped_model_output(self, llm_client):
        llm_client.complete.return_value = "  Open settings and click reset [S1].  "
        composer = AnswerComposer(llm_client=llm_client)

        answer = composer.compose("How do I reset my password?", PASSWORD_CHUNKS, AppSettings())

        assert answer == "Open settings and click reset [S1]."
        llm_client.complete.assert_called_once()

    def test_request_shape(self, llm_client):
        llm_client.complete.return_value = "ok"
        composer = AnswerComposer(llm_client=llm_client, temperature=0.3)

        composer.compose("How do I reset my password?", PASSWORD_CHUNKS, AppSettings(max_tokens=200))

        kwargs = llm_client.complete.call_args.kwargs
        assert kwargs["model"] == "gpt-4o-mini"
        assert kwargs["max_tokens"] == 200
        assert kwargs["temperature"] == 0.3
        messages = kwargs["messages"]
        assert messages[0] == {"role": "system", "content": SYSTEM_PROMPT}
        assert messages[1]["role"] == "user"
        assert "Question: How do I reset my password?" in messages[1]["content"]
        assert "Source 1: Account" in messages[1]["content"]
        assert "Source 2: Admin" in messages[1]["content"]

    def test_failed_model_falls_through_to_next(self, llm_client):
        llm_client.complete.side_effect = [RuntimeError("rate limited"), "Second model answer"]
        composer = AnswerComposer(llm_client=llm_client)

        answer = composer.compose("How do I reset my password?", PASSWORD_CHUNKS, AppSettings())

        assert answer == "Second model answer"
        models = [call.kwargs["model"] for call in llm_client.complete.call_args_list]
        assert models == ["gpt-4o-mini", "openai/gpt-4.1-mini"]

    def test_client_model_tried_after_admin_model(self, llm_client):
        llm_client.model = "anthropic/claude-haiku-4-5-20251001"
        llm_client.complete.side_effect = [RuntimeError("wrong provider key"), "Haiku answer"]
        composer = AnswerComposer(llm_client=llm_client)

        answer = composer.compose("How do I reset my password?", PASSWORD_CHUNKS, AppSettings())

        assert answer == "Haiku answer"
        models = [call.kwargs["model"] for call in llm_client.complete.call_args_list]
        assert models == ["gpt-4o-mini", "anthropic/claude-haiku-4-5-20251001"]

    def test_empty_output_falls_through_to_next(self, llm_client):
        llm_client.complete.side_effect = ["   ", "Filled in"]
        composer = AnswerComposer(llm_client=llm_client)

        assert composer.compose("reset password", PASSWORD_CHUNKS, AppSettings()) == "Filled in"

    def test_all_candidates_fail_uses_extraction(self, llm_client, caplog):
        llm_client.complete.side_effect = RuntimeError("down")
        composer = AnswerComposer(llm_client=llm_client)

        answer = composer.compose("How do I reset my password?", PASSWORD_CHUNKS, AppSettings())

        assert answer.startswith(EXTRACTIVE_HEADER)
        assert llm_client.complete.call_count == 2
        assert "using extractive fallback" in caplog.text

    def test_uses_model(self, llm_client):
        assert AnswerComposer(llm_client=llm_client).uses_model
        assert not AnswerComposer().uses_model


class TestCandidateModels:
    def test_default_chain(self):
        composer = AnswerComposer()
        assert composer.candidate_models("gpt-4o-mini") == ["gpt-4o-mini", "openai/gpt-4.1-mini"]

    def test_env_fallback_comes_second(self):
        composer = AnswerComposer(fallback_model="anthropic/claude-haiku-4-5-20251001")
        assert composer.candidate_models("openai/gpt-5-mini") == [
            "openai/gpt-5-mini",
            "anthropic/claude-haiku-4-5-20251001",
            "openai/gpt-4o-mini",
            "openai/gpt-4.1-mini",
        ]

    def test_client_model_comes_before_env_fallback(self):
        client = MagicMock(spec=LLMClient)
        client.model = "anthropic/claude-haiku-4-5-20251001"
        composer = AnswerComposer(llm_client=client, fallback_model="openai/gpt-5-mini")
        assert composer.candidate_models("gpt-4o-mini") == [
            "gpt-4o-mini",
            "anthropic/claude-haiku-4-5-20251001",
            "openai/gpt-5-mini",
            "openai/gpt-4.1-mini",
        ]

    def test_client_model_matching_admin_model_not_repeated(self):
        client = MagicMock(spec=LLMClient)
        client.model = "openai/gpt-4o-mini"
        composer = AnswerComposer(llm_client=client)
        assert composer.candidate_models("gpt-4o-mini") == ["gpt-4o-mini", "openai/gpt-4.1-mini"]

    def test_blank_entries_skipped(self):
        composer = AnswerComposer(fallback_model="  ")
        assert composer.candidate_models("") == ["openai/gpt-4o-mini", "openai/gpt-4.1-mini"]

    def test_from_settings(self):
        settings = Settings(temperature=0.5, fallback_model="gpt-5-mini", extractive_chunks=2)
        composer = AnswerComposer.from_settings(settings, None)
        assert composer.temperature == 0.5
        assert composer.fallback_model == "gpt-5-mini"
        assert composer.extractive_chunks == 2
        assert not composer.uses_model


class TestExtractiveMode:
    def test_overview_and_highlights(self):
        answer = AnswerComposer().compose(
            "How do I reset my password?", PASSWORD_CHUNKS, AppSettings()
        )
        lines = answer.split("\n")

        assert lines[0] == EXTRACTIVE_HEADER
        assert lines[1] == ""
        assert lines[2].startswith("You can reset your password from the account settings page.")
        assert lines[2].endswith("[S1]")
        assert "- Administrators can reset password for any member of the workspace. [S2]" in lines

    def test_non_matching_sentence_left_out(self):
        answer = AnswerComposer().extract("How do I reset my password?", PASSWORD_CHUNKS)
        assert "twelve characters" not in answer

    def test_definition_leads_for_what_is_questions(self):
        chunks = [
            ranked("Enable SSO from the admin console security tab.", url="https://a.test/setup"),
            ranked(
                "SSO is a login method that shares one identity across apps.",
                url="https://a.test/glossary",
            ),
        ]
        lines = AnswerComposer().extract("What is SSO?", chunks).split("\n")

        assert lines[2] == "SSO is a login method that shares one identity across apps. [S2]"
        assert "- Enable SSO from the admin console security tab. [S1]" in lines

    def test_only_top_chunks_used(self):
        chunks = [
            ranked(f"Step {i} explains how the password reset flow works.", url=f"https://a.test/{i}")
            for i in range(1, 6)
        ]
        answer = AnswerComposer(extractive_chunks=2).extract("password reset", chunks)
        assert "[S3]" not in answer
        assert "[S1]" in answer

    def test_no_ranked_chunks(self):
        assert AnswerComposer().extract("anything", []) == EXTRACTIVE_HEADER


class TestHelpers:
    def test_build_context(self):
        context = build_context(PASSWORD_CHUNKS[1:])
        assert context == (
            "Source 1: Admin\n"
            "Administrators can reset password for any member of the workspace."
        )

    def test_definition_topic(self):
        assert definition_topic("What are the API limits?") == {"api", "limits"}
        assert definition_topic("what is an SSO provider") == {"sso", "provider"}
        assert definition_topic("How do I log in?") == set()

    def test_trim_short_text_untouched(self):
        assert trim_to_sentence("Short.", 100) == "Short."

    def test_trim_at_sentence_end(self):
        text = "Alpha beta gamma. Delta epsilon zeta eta theta."
        assert trim_to_sentence(text, 30) == "Alpha beta gamma."

    def test_trim_at_word_boundary(self):
        assert trim_to_sentence("aaaa bbbb cccc dddd eeee", 12) == "aaaa bbbb…"
