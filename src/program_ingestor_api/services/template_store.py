"""
Template Store

Destination for extracted StructuredTemplates. The HTTP layer depends on
the TemplateStore protocol; the in-memory implementation backs the
default app and the tests.
"""
import logging
from threading import Lock
from typing import Dict, List, Optional, Protocol

from program_ingestor_api.extraction.models import StructuredTemplate


logger = logging.getLogger(__name__)


class TemplateStore(Protocol):
    def save(self, template: StructuredTemplate) -> str:
        ...

    def get(self, template_id: str) -> Optional[StructuredTemplate]:
        ...

    def list(self) -> List[StructuredTemplate]:
        ...


class InMemoryTemplateStore:
    """Process-local template store keyed by template id."""

    def __init__(self):
        self._templates: Dict[str, StructuredTemplate] = {}
        self._lock = Lock()

    def save(self, template: StructuredTemplate) -> str:
        with self._lock:
            self._templates[template.id] = template
        logger.info(f"Stored template {template.id} ({template.name})")
        return template.id

    def get(self, template_id: str) -> Optional[StructuredTemplate]:
        with self._lock:
            return self._templates.get(template_id)

    def list(self) -> List[StructuredTemplate]:
        with self._lock:
            return sorted(self._templates.values(), key=lambda t: t.created_at)

    def clear(self) -> None:
        with self._lock:
            self._templates.clear()
