"""
Anthropic AI Provider.

Provides AI capabilities using Anthropic's Claude API directly.
"""
from typing import List

import anthropic

from ...core.config import ANTHROPIC_API_KEY, ANTHROPIC_MODEL
from ...core.logging_config import get_logger
from .base import AIProvider, ConversationTurn, ProviderAnswer
from .prompts import ANSWER_SYSTEM_PROMPT, build_answer_prompt, build_summary_prompt, parse_answer

logger = get_logger(__name__)


class AnthropicProvider(AIProvider):
    """AI Provider using Anthropic Claude API directly."""
    
    def __init__(self, api_key: str = None, model: str = None):
        """Initialize Anthropic provider with API key."""
        self.api_key = api_key or ANTHROPIC_API_KEY
        self.model = model or ANTHROPIC_MODEL
        if self.api_key:
            self.client = anthropic.Anthropic(api_key=self.api_key)
        else:
            self.client = None
    
    def generate_summary(self, text: str) -> str:
        """Generate a concise summary of the document."""
        if not self.client:
            raise ValueError("Anthropic API key not configured")
        
        try:
            message = self.client.messages.create(
                model=self.model,
                max_tokens=300,
                messages=[
                    {"role": "user", "content": build_summary_prompt(text)}
                ]
            )
            return message.content[0].text
        except Exception as e:
            logger.error(f"Anthropic API Error (Summary): {e}")
            raise
    
    def answer_question(
        self,
        question: str,
        document_text: str,
        history: List[ConversationTurn]
    ) -> ProviderAnswer:
        """Answer a question about the document."""
        if not self.client:
            raise ValueError("Anthropic API key not configured")
        
        try:
            message = self.client.messages.create(
                model=self.model,
                max_tokens=1000,
                system=ANSWER_SYSTEM_PROMPT,
                messages=[
                    {"role": "user", "content": build_answer_prompt(question, document_text, history)}
                ]
            )
            return parse_answer(message.content[0].text)
        except Exception as e:
            logger.error(f"Anthropic API Error (Answer): {e}")
            raise
