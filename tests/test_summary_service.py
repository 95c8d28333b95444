"""Tests for the optional LLM summary collaborator."""
from unittest.mock import MagicMock, patch

import pytest

from program_ingestor_api.extraction import process_document
from program_ingestor_api.services.summary_service import SummaryService, SummaryServiceError


@pytest.fixture
def pattern_result(push_pull_pdf):
    return process_document(push_pull_pdf, "ppl.pdf")


@pytest.fixture
def openai_client():
    client = MagicMock()
    client.chat.completions.create.return_value = MagicMock(
        choices=[MagicMock(message=MagicMock(content="  A two day push/pull split.  "))]
    )
    return client


class TestSummarize:

    def test_openai_summary(self, pattern_result, openai_client):
        service = SummaryService(provider="openai", model="gpt-4o-mini", client=openai_client)

        assert service.summarize(pattern_result) == "A two day push/pull split."

        call_kwargs = openai_client.chat.completions.create.call_args[1]
        assert call_kwargs["model"] == "gpt-4o-mini"
        assert "Bench Press: 4 x 8-10, rest 90s" in call_kwargs["messages"][1]["content"]

    def test_anthropic_summary(self, pattern_result):
        client = MagicMock()
        client.messages.create.return_value = MagicMock(content=[MagicMock(text="Push/pull split.")])
        service = SummaryService(provider="anthropic", model="claude-test", client=client)

        assert service.summarize(pattern_result) == "Push/pull split."
        assert client.messages.create.call_args[1]["system"] == SummaryService.SUMMARY_PROMPT

    def test_does_not_modify_result(self, pattern_result, openai_client):
        before = pattern_result.model_dump()

        SummaryService(provider="openai", client=openai_client).summarize(pattern_result)

        assert pattern_result.model_dump() == before

    def test_manual_result_has_nothing_to_summarize(self, openai_client):
        result = process_document(b"", "notes.pdf")

        with pytest.raises(SummaryServiceError, match="No exercises"):
            SummaryService(provider="openai", client=openai_client).summarize(result)

        openai_client.chat.completions.create.assert_not_called()

    def test_missing_api_key_is_a_service_error(self, pattern_result):
        service = SummaryService(provider="openai")

        with patch(
            "program_ingestor_api.services.summary_service.LLMClientFactory.create_client",
            side_effect=ValueError("openai API key not configured"),
        ):
            with pytest.raises(SummaryServiceError, match="not configured"):
                service.summarize(pattern_result)

    def test_provider_failure_is_a_service_error(self, pattern_result, openai_client):
        openai_client.chat.completions.create.side_effect = Exception("Error 401: Unauthorized")

        with pytest.raises(SummaryServiceError, match="Summary generation failed"):
            SummaryService(provider="openai", client=openai_client).summarize(pattern_result)

        assert openai_client.chat.completions.create.call_count == 1

    def test_empty_summary(self, pattern_result, openai_client):
        openai_client.chat.completions.create.return_value = MagicMock(
            choices=[MagicMock(message=MagicMock(content=""))]
        )

        with pytest.raises(SummaryServiceError, match="Empty"):
            SummaryService(provider="openai", client=openai_client).summarize(pattern_result)


def test_describe_lists_days_and_notes(pattern_result):
    text = SummaryService.describe(pattern_result)

    assert text.startswith("Program: Push Pull Hypertrophy")
    assert "Day 2: Pull:" in text
    assert "Note: Keep one rep in reserve" in text
