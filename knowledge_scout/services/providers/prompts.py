"""
Prompt templates shared by the AI providers.
"""
import json
import re
from typing import List

from .base import ConversationTurn, ProviderAnswer

SUMMARY_MAX_CHARS = 10000

SUMMARY_PROMPT = (
    "Please provide a concise summary of the following document in 3-5 sentences. "
    "Do not include any preamble like 'Here is a summary'. Just provide the summary directly:\n\n{text}"
)

ANSWER_SYSTEM_PROMPT = """You are an AI assistant answering questions about a single document.
Use only the document content and the conversation so far.
If the document does not contain the answer, say that you don't know instead of making one up.

Respond with a JSON object and nothing else:
{"answer": "<your answer>", "confidence": <number between 0 and 1>}"""

ANSWER_PROMPT_TEMPLATE = """Document content:
{document_text}

Conversation so far:
{history}

Question: {question}"""


def build_summary_prompt(text: str) -> str:
    return SUMMARY_PROMPT.format(text=text[:SUMMARY_MAX_CHARS])


def format_history(history: List[ConversationTurn]) -> str:
    if not history:
        return "(no previous messages)"
    lines = []
    for turn in history:
        speaker = "User" if turn.role == "user" else "Assistant"
        lines.append(f"{speaker}: {turn.content}")
    return "\n".join(lines)


def build_answer_prompt(question: str, document_text: str, history: List[ConversationTurn]) -> str:
    """The entire document text is embedded, no chunking or retrieval."""
    return ANSWER_PROMPT_TEMPLATE.format(
        document_text=document_text,
        history=format_history(history),
        question=question,
    )


_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)


def parse_answer(raw: str) -> ProviderAnswer:
    """
    Parse the model's JSON reply.
    
    Models do not always follow the format; anything that is not a JSON
    object with an "answer" key is returned as plain answer text.
    """
    raw = (raw or "").strip()
    match = _JSON_OBJECT.search(raw)
    if match:
        try:
            data = json.loads(match.group(0))
        except json.JSONDecodeError:
            data = None
        if isinstance(data, dict) and isinstance(data.get("answer"), str):
            confidence = data.get("confidence")
            if not isinstance(confidence, (int, float)) or isinstance(confidence, bool):
                confidence = None
            return ProviderAnswer(text=data["answer"].strip(), confidence=confidence)
    return ProviderAnswer(text=raw, confidence=None)
