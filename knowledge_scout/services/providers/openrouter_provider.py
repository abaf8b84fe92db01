"""
OpenRouter AI Provider.

Provides AI capabilities using OpenRouter API (supports multiple models)
through the OpenAI-compatible client.
"""
from typing import List

from openai import OpenAI

from ...core.config import OPENROUTER_API_KEY, OPENROUTER_BASE_URL, OPENROUTER_MODEL
from ...core.logging_config import get_logger
from .base import AIProvider, ConversationTurn, ProviderAnswer
from .prompts import ANSWER_SYSTEM_PROMPT, build_answer_prompt, build_summary_prompt, parse_answer

logger = get_logger(__name__)


class OpenRouterProvider(AIProvider):
    """AI Provider using OpenRouter API."""
    
    def __init__(self, api_key: str = None, model: str = None):
        """Initialize OpenRouter provider with API key."""
        self.api_key = api_key or OPENROUTER_API_KEY
        self.model = model or OPENROUTER_MODEL
        if self.api_key:
            self.client = OpenAI(
                base_url=OPENROUTER_BASE_URL,
                api_key=self.api_key
            )
        else:
            self.client = None
    
    def generate_summary(self, text: str) -> str:
        """Generate a concise summary of the document."""
        if not self.client:
            raise ValueError("OpenRouter API key not configured")
        
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "user", "content": build_summary_prompt(text)}
                ],
                max_tokens=300
            )
            return response.choices[0].message.content
        except Exception as e:
            logger.error(f"OpenRouter API Error (Summary): {e}")
            raise
    
    def answer_question(
        self,
        question: str,
        document_text: str,
        history: List[ConversationTurn]
    ) -> ProviderAnswer:
        """Answer a question about the document."""
        if not self.client:
            raise ValueError("OpenRouter API key not configured")
        
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": ANSWER_SYSTEM_PROMPT},
                    {"role": "user", "content": build_answer_prompt(question, document_text, history)}
                ],
                max_tokens=1000
            )
            return parse_answer(response.choices[0].message.content)
        except Exception as e:
            logger.error(f"OpenRouter API Error (Answer): {e}")
            raise
