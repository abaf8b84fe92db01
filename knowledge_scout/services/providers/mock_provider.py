"""
Mock AI Provider.

Provides mock implementations for testing and fallback scenarios.
Does not make actual API calls, returns simulated responses.
"""
import re
from typing import List

from .base import AIProvider, ConversationTurn, ProviderAnswer

_WORD = re.compile(r"[a-zA-Z]{4,}")


class MockProvider(AIProvider):
    """
    Mock AI Provider for testing and fallback scenarios.
    
    Useful for:
    - Development and testing
    - Running without API keys configured
    - Offline development
    """
    
    def generate_summary(self, text: str) -> str:
        """Generate a mock summary for testing."""
        return "This is a MOCK summary. The document appears to contain information about..." + text[:100] + "..."
    
    def answer_question(
        self,
        question: str,
        document_text: str,
        history: List[ConversationTurn]
    ) -> ProviderAnswer:
        """Answer with the first document sentence sharing a keyword with the question."""
        keywords = {w.lower() for w in _WORD.findall(question)}
        sentences = [s.strip() for s in re.split(r"(?<=[.!?])\s+", document_text) if s.strip()]
        for sentence in sentences:
            if keywords & {w.lower() for w in _WORD.findall(sentence)}:
                return ProviderAnswer(text=f"MOCK answer: {sentence}", confidence=0.8)
        return ProviderAnswer(
            text="MOCK answer: I don't know based on this document.",
            confidence=0.2
        )
