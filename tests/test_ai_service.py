import pytest

from knowledge_scout.api.exceptions import AIUnavailableError
from knowledge_scout.services.ai_service import SUMMARY_UNAVAILABLE, AIService
from knowledge_scout.services.providers import AIProviderFactory, MockProvider
from knowledge_scout.services.providers.prompts import build_answer_prompt, parse_answer

from .conftest import FakeProvider


def test_summary_failure_falls_back_to_fixed_text():
    service = AIService(provider=FakeProvider(fail=True))
    assert service.generate_summary("text") == SUMMARY_UNAVAILABLE


def test_empty_summary_falls_back():
    service = AIService(provider=FakeProvider(summary="   "))
    assert service.generate_summary("text") == SUMMARY_UNAVAILABLE


def test_answer_failure_raises():
    service = AIService(provider=FakeProvider(fail=True))
    with pytest.raises(AIUnavailableError):
        service.answer_question("q", "doc", [])


@pytest.mark.parametrize("raw, expected", [(1.7, 1.0), (-0.2, 0.0), (None, 0.5), (0.25, 0.25)])
def test_confidence_is_clamped(raw, expected):
    service = AIService(provider=FakeProvider(confidence=raw))
    assert service.answer_question("q", "doc", []).confidence == expected


def test_parse_answer_json():
    answer = parse_answer('Sure! {"answer": "Paris", "confidence": 0.8}')
    assert answer.text == "Paris"
    assert answer.confidence == 0.8


def test_parse_answer_plain_text():
    answer = parse_answer("Just Paris.")
    assert answer.text == "Just Paris."
    assert answer.confidence is None


def test_answer_prompt_contains_full_document():
    prompt = build_answer_prompt("Where?", "x" * 20000, [])
    assert "x" * 20000 in prompt
    assert "(no previous messages)" in prompt


def test_factory_falls_back_to_mock_without_keys(monkeypatch):
    from knowledge_scout.services.providers import factory
    monkeypatch.setattr(factory, "OPENROUTER_API_KEY", None)
    monkeypatch.setattr(factory, "ANTHROPIC_API_KEY", None)
    assert isinstance(AIProviderFactory.get_provider("openrouter"), MockProvider)
    assert isinstance(AIProviderFactory.get_provider("mock"), MockProvider)
