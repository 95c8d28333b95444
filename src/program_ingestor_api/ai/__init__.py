"""LLM client management for the program ingestor API."""
from .client_factory import LLMClientFactory, LLMRequestContext
from .retry import is_retryable_error, retry_sync_call

__all__ = [
    "LLMClientFactory",
    "LLMRequestContext",
    "is_retryable_error",
    "retry_sync_call",
]
