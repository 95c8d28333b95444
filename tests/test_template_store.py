"""Tests for the in-memory template store."""
from program_ingestor_api.extraction.models import StructuredTemplate
from program_ingestor_api.services.template_store import InMemoryTemplateStore


def test_save_and_get():
    store = InMemoryTemplateStore()
    template = StructuredTemplate(name="Push Pull")

    template_id = store.save(template)

    assert template_id == template.id
    assert store.get(template_id) == template


def test_missing_template():
    assert InMemoryTemplateStore().get("does-not-exist") is None


def test_list_and_clear():
    store = InMemoryTemplateStore()
    first = StructuredTemplate(name="First")
    second = StructuredTemplate(name="Second")
    store.save(first)
    store.save(second)

    assert [t.name for t in store.list()] == ["First", "Second"]

    store.clear()
    assert store.list() == []


def test_save_overwrites_same_id():
    store = InMemoryTemplateStore()
    template = StructuredTemplate(name="Original")
    store.save(template)
    store.save(template.model_copy(update={"name": "Renamed"}))

    assert store.get(template.id).name == "Renamed"
    assert len(store.list()) == 1
