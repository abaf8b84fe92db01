"""
SQLAlchemy models. Importing this package registers every table on Base.metadata.
"""
from .user import User
from .document import Document, DocumentStatus
from .chat import ChatSession, Message, MessageRole

__all__ = [
    "User",
    "Document",
    "DocumentStatus",
    "ChatSession",
    "Message",
    "MessageRole",
]
