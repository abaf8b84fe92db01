"""
Base AI Provider Interface.

All AI providers must inherit from this base class and implement
all abstract methods.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional


@dataclass
class ConversationTurn:
    """One prior chat message handed to the model as context."""
    role: str  # "user" or "assistant"
    content: str


@dataclass
class ProviderAnswer:
    """Raw answer returned by a provider."""
    text: str
    confidence: Optional[float] = None


class AIProvider(ABC):
    """
    Abstract base class for AI providers.
    
    Providers raise on any failure. Deciding between a fallback and an
    error is left to the calling service.
    """
    
    @abstractmethod
    def generate_summary(self, text: str) -> str:
        """
        Generate a concise summary of the document text.
        
        Args:
            text: Document text content
            
        Returns:
            Summary string
        """
        pass
    
    @abstractmethod
    def answer_question(
        self,
        question: str,
        document_text: str,
        history: List[ConversationTurn]
    ) -> ProviderAnswer:
        """
        Answer a question about a document.
        
        Args:
            question: The user's new question
            document_text: Full extracted text of the document
            history: Prior conversation turns, oldest first
            
        Returns:
            ProviderAnswer with the answer text and optional confidence
        """
        pass
