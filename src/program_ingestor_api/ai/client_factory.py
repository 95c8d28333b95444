"""LLM client factory for the summary collaborator, with optional Helicone proxying."""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from program_ingestor_api.config import settings


logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0

# provider -> (Helicone proxy base URL, settings attribute holding the API key)
_PROVIDERS: Dict[str, tuple[str, str]] = {
    "openai": ("https://oai.helicone.ai/v1", "OPENAI_API_KEY"),
    "anthropic": ("https://anthropic.helicone.ai", "ANTHROPIC_API_KEY"),
}


@dataclass
class LLMRequestContext:
    """Per-request metadata forwarded to the observability proxy."""

    feature_name: str = "program_summary"
    document_name: str | None = None
    extraction_method: str | None = None
    request_id: str | None = None
    custom_properties: dict[str, str] = field(default_factory=dict)

    def to_tracking_headers(self) -> dict[str, str]:
        headers: dict[str, str] = {
            "Helicone-Property-Feature": self.feature_name,
            "Helicone-Property-Environment": settings.ENVIRONMENT,
        }

        if self.document_name:
            headers["Helicone-Property-Document"] = self.document_name

        if self.extraction_method:
            headers["Helicone-Property-Method"] = self.extraction_method

        if self.request_id:
            headers["Helicone-Request-Id"] = self.request_id

        for key, value in self.custom_properties.items():
            headers[f"Helicone-Property-{key.replace('_', '-').title()}"] = str(value)

        return headers


class LLMClientFactory:
    """Builds OpenAI or Anthropic clients from settings."""

    @staticmethod
    def client_kwargs(
        provider: str,
        context: Optional[LLMRequestContext] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> dict[str, Any]:
        """
        Constructor arguments for a provider client.

        Raises:
            ValueError: Unknown provider or missing API key
        """
        if provider not in _PROVIDERS:
            raise ValueError(f"Unsupported LLM provider: {provider}")

        proxy_url, key_setting = _PROVIDERS[provider]
        api_key = getattr(settings, key_setting)
        if not api_key:
            raise ValueError(f"{provider} API key not configured. Set {key_setting} environment variable.")

        kwargs: dict[str, Any] = {"api_key": api_key, "timeout": timeout}

        if settings.HELICONE_ENABLED:
            if not settings.HELICONE_API_KEY:
                logger.warning(
                    f"HELICONE_ENABLED=true but HELICONE_API_KEY not set. "
                    f"Falling back to direct {provider} API calls."
                )
            else:
                headers = {"Helicone-Auth": f"Bearer {settings.HELICONE_API_KEY}"}
                if context:
                    headers.update(context.to_tracking_headers())
                kwargs["base_url"] = proxy_url
                kwargs["default_headers"] = headers

        return kwargs

    @classmethod
    def create_client(
        cls,
        provider: str,
        context: Optional[LLMRequestContext] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> Any:
        """
        Create a provider client.

        Args:
            provider: 'openai' or 'anthropic'
            context: Request context for observability headers
            timeout: Client timeout in seconds

        Raises:
            ImportError: If the provider library is not installed
            ValueError: If the provider is unknown or not configured
        """
        kwargs = cls.client_kwargs(provider, context, timeout)
        proxied = "base_url" in kwargs

        if provider == "openai":
            try:
                import openai
            except ImportError as e:
                raise ImportError("OpenAI library not installed. Run: pip install openai") from e
            logger.debug(f"Creating OpenAI client ({'Helicone proxy' if proxied else 'direct'})")
            return openai.OpenAI(**kwargs)

        try:
            from anthropic import Anthropic
        except ImportError as e:
            raise ImportError("Anthropic library not installed. Run: pip install anthropic") from e
        logger.debug(f"Creating Anthropic client ({'Helicone proxy' if proxied else 'direct'})")
        return Anthropic(**kwargs)
