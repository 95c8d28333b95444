"""
Summary Service

Optional narrative enhancement: asks an LLM for a short plain-language
summary of an extracted program. Read-only with respect to the result;
template, confidence and method are never changed here.
"""
import logging
from typing import Any, Optional

from program_ingestor_api.ai import LLMClientFactory, LLMRequestContext, retry_sync_call
from program_ingestor_api.config import settings
from program_ingestor_api.extraction.models import ProcessingResult


logger = logging.getLogger(__name__)

DEFAULT_MODELS = {
    "openai": "gpt-4o-mini",
    "anthropic": "claude-3-5-haiku-latest",
}
MAX_SUMMARY_TOKENS = 300


class SummaryServiceError(Exception):
    """Raised when a summary could not be produced."""


class SummaryService:
    """Builds LLM summaries of extracted workout programs."""

    SUMMARY_PROMPT = """You are a strength coach. Summarize the workout program below for the athlete in 2-4 sentences.
Mention the training split, the main lifts and anything that looks incomplete.
Do not invent exercises that are not listed. Return plain text only."""

    def __init__(
        self,
        provider: Optional[str] = None,
        model: Optional[str] = None,
        client: Any = None,
    ):
        self.provider = provider or settings.SUMMARY_PROVIDER
        self.model = model or settings.SUMMARY_MODEL or DEFAULT_MODELS.get(self.provider, "gpt-4o-mini")
        self._client = client

    @staticmethod
    def describe(result: ProcessingResult) -> str:
        """Plain-text rendering of the schedule handed to the model"""
        template = result.template
        lines = [
            f"Program: {template.name}",
            f"Difficulty: {template.difficulty}, {template.days_per_week} days/week, {template.duration_weeks} weeks",
            f"Extraction method: {result.method.value} (confidence {result.confidence:.2f})",
        ]
        for day in template.schedule:
            lines.append(f"{day.name}:")
            for exercise in day.exercises:
                lines.append(
                    f"- {exercise.name}: {exercise.sets} x {exercise.reps}, rest {exercise.rest_seconds}s"
                )
            if day.notes:
                lines.append(f"  Note: {day.notes}")
        return "\n".join(lines)

    def _get_client(self, result: ProcessingResult) -> Any:
        if self._client is None:
            context = LLMRequestContext(
                document_name=result.template.name,
                extraction_method=result.method.value,
                custom_properties={"model": self.model},
            )
            self._client = LLMClientFactory.create_client(self.provider, context=context)
        return self._client

    def _complete(self, client: Any, prompt: str) -> str:
        if self.provider == "anthropic":
            response = client.messages.create(
                model=self.model,
                max_tokens=MAX_SUMMARY_TOKENS,
                system=self.SUMMARY_PROMPT,
                messages=[{"role": "user", "content": prompt}],
            )
            return response.content[0].text

        response = client.chat.completions.create(
            model=self.model,
            max_tokens=MAX_SUMMARY_TOKENS,
            temperature=0.2,
            messages=[
                {"role": "system", "content": self.SUMMARY_PROMPT},
                {"role": "user", "content": prompt},
            ],
        )
        return response.choices[0].message.content

    def summarize(self, result: ProcessingResult) -> str:
        """
        Summarize an extracted program.

        Args:
            result: Pipeline output; not modified

        Returns:
            Summary text

        Raises:
            SummaryServiceError: Nothing to summarize, client not configured,
                or the provider failed after retries
        """
        if not result.extracted_exercises:
            raise SummaryServiceError("No exercises to summarize")

        try:
            client = self._get_client(result)
        except (ImportError, ValueError) as e:
            raise SummaryServiceError(str(e)) from e

        prompt = self.describe(result)

        try:
            summary = retry_sync_call(self._complete, client, prompt)
        except Exception as e:
            logger.error(f"Summary generation failed ({self.provider}/{self.model}): {e}")
            raise SummaryServiceError(f"Summary generation failed: {e}") from e

        summary = (summary or "").strip()
        if not summary:
            raise SummaryServiceError("Empty summary returned")

        logger.info(f"Generated {len(summary)} char summary for {result.template.name}")
        return summary
