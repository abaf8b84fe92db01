from typing import List, Optional

from .providers import AIProvider, AIProviderFactory, ConversationTurn, ProviderAnswer
from ..api.exceptions import AIUnavailableError
from ..core.logging_config import get_logger

logger = get_logger(__name__)

SUMMARY_UNAVAILABLE = "AI summary generation is currently unavailable."
DEFAULT_CONFIDENCE = 0.5


class AIService:
    """
    AI service implementation.
    Handles AI operations - document summaries and document question answering.
    
    The two operations fail differently: a summary failure is replaced by a
    fixed sentence so document processing can still complete, while an
    answer failure is raised so the chat caller sees an error.
    """
    def __init__(self, provider: Optional[AIProvider] = None):
        self.provider = provider or AIProviderFactory.get_provider()
        logger.info(f"Initialized AIService with provider: {type(self.provider).__name__}")
    
    def generate_summary(self, text: str) -> str:
        logger.debug(f"Generating summary for text (length: {len(text)} chars)")
        try:
            result = self.provider.generate_summary(text)
        except Exception as e:
            logger.error(f"AI Service Error generating summary: {e}", exc_info=True)
            return SUMMARY_UNAVAILABLE
        if not result or not result.strip():
            logger.warning("AI provider returned an empty summary")
            return SUMMARY_UNAVAILABLE
        logger.debug(f"Summary generated successfully (length: {len(result)} chars)")
        return result.strip()
    
    def answer_question(
        self,
        question: str,
        document_text: str,
        history: List[ConversationTurn]
    ) -> ProviderAnswer:
        """
        Answer a question about a document.
        
        Args:
            question: The user's question
            document_text: Full extracted text of the document
            history: Bounded prior conversation, oldest first
            
        Returns:
            ProviderAnswer with confidence clamped to [0, 1]
            
        Raises:
            AIUnavailableError: If the provider call fails or returns nothing
        """
        logger.debug(f"Answering question with {len(history)} prior messages")
        try:
            result = self.provider.answer_question(question, document_text, history)
        except Exception as e:
            logger.error(f"AI Service Error answering question: {e}", exc_info=True)
            raise AIUnavailableError("AI service is currently unavailable. Please try again later.") from e
        
        if result is None or not (result.text or "").strip():
            logger.error("AI provider returned an empty answer")
            raise AIUnavailableError("AI service is currently unavailable. Please try again later.")
        
        confidence = result.confidence
        if confidence is None:
            confidence = DEFAULT_CONFIDENCE
        confidence = min(1.0, max(0.0, float(confidence)))
        return ProviderAnswer(text=result.text.strip(), confidence=confidence)
