"""
Chat Service - Conversational answering over a single document.

Sessions belong to one user and one document. Each question is answered
from the document's full extracted text plus a bounded window of the
most recent prior messages.
"""
import asyncio
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from sqlalchemy.orm import Session

from .ai_service import AIService
from .document_service import DocumentService
from .providers import ConversationTurn
from ..api.exceptions import AccessDeniedError, DocumentNotReadyError, NotFoundError
from ..core.config import CHAT_CONTEXT_WINDOW
from ..core.logging_config import get_logger
from ..models import ChatSession, Document, Message, MessageRole
from ..models.base import utcnow

logger = get_logger(__name__)


@dataclass
class AnswerResult:
    answer_text: str
    sources: List[str] = field(default_factory=list)
    confidence: float = 0.5


@dataclass
class Exchange:
    """Persisted question and answer pair."""
    user_message: Message
    assistant_message: Message
    sources: List[str]
    confidence: float


class ChatService:
    """
    Service for chat sessions and document question answering.
    """
    
    def __init__(
        self,
        ai_service: AIService,
        document_service: DocumentService,
        context_window: int = CHAT_CONTEXT_WINDOW
    ):
        """
        Initialize chat service.
        
        Args:
            ai_service: AIService used for answering
            document_service: DocumentService for ownership-checked lookups
            context_window: Number of prior messages sent to the model
        """
        self.ai_service = ai_service
        self.document_service = document_service
        self.context_window = context_window
    
    def answer(
        self,
        question: str,
        document_text: str,
        prior_messages: Sequence[Message],
        document_title: Optional[str] = None
    ) -> AnswerResult:
        """
        Answer a question about a document.
        
        Only the last `context_window` prior messages are used, in
        chronological order. Raises AIUnavailableError on AI failure.
        
        Args:
            question: The new question
            document_text: Full extracted text
            prior_messages: Earlier messages of the session, oldest first
            document_title: Reported as the answer's source
        
        Returns:
            AnswerResult
        """
        recent = list(prior_messages)[-self.context_window:] if self.context_window > 0 else []
        history = [ConversationTurn(role=m.role, content=m.content) for m in recent]
        
        result = self.ai_service.answer_question(question, document_text or "", history)
        return AnswerResult(
            answer_text=result.text,
            sources=[document_title] if document_title else [],
            confidence=result.confidence,
        )
    
    async def ask(self, db: Session, session: ChatSession, question: str) -> Exchange:
        """
        Persist a question, answer it and persist the answer.
        
        The user message is committed before the AI call, so on
        AIUnavailableError it remains stored without an assistant reply.
        
        Raises:
            DocumentNotReadyError: If the document is not completed
            AIUnavailableError: If the AI call fails
        """
        document = session.document
        if document is None or not document.is_completed():
            raise DocumentNotReadyError("Document is not ready for chat. Please wait until processing completes.")
        
        prior_messages = self._recent_messages(db, session.id)
        
        user_message = Message(content=question, role=MessageRole.USER.value, session_id=session.id)
        db.add(user_message)
        session.updated_at = utcnow()
        db.commit()
        
        loop = asyncio.get_event_loop()
        result = await loop.run_in_executor(
            None, self.answer, question, document.extracted_text, prior_messages, document.title
        )
        
        assistant_message = Message(content=result.answer_text, role=MessageRole.ASSISTANT.value, session_id=session.id)
        db.add(assistant_message)
        session.updated_at = utcnow()
        db.commit()
        logger.info(f"Answered question in session {session.id} (confidence {result.confidence:.2f})")
        
        return Exchange(
            user_message=user_message,
            assistant_message=assistant_message,
            sources=result.sources,
            confidence=result.confidence,
        )
    
    def _recent_messages(self, db: Session, session_id: str) -> List[Message]:
        """Last context_window messages of a session, oldest first."""
        if self.context_window <= 0:
            return []
        newest_first = (
            db.query(Message)
            .filter(Message.session_id == session_id)
            .order_by(Message.timestamp.desc())
            .limit(self.context_window)
            .all()
        )
        return list(reversed(newest_first))
    
    def create_session(
        self,
        db: Session,
        user_id: str,
        document_id: str,
        title: Optional[str] = None
    ) -> ChatSession:
        """
        Start a chat session about a completed document.
        
        Raises:
            NotFoundError, AccessDeniedError: From the document lookup
            DocumentNotReadyError: If the document is not completed
        """
        document: Document = self.document_service.get_document(db, document_id, user_id)
        if not document.is_completed():
            raise DocumentNotReadyError("Document is not ready for chat. Please wait until processing completes.")
        
        session = ChatSession(
            title=title or f"Chat about {document.title}",
            user_id=user_id,
            document_id=document.id,
        )
        db.add(session)
        db.commit()
        db.refresh(session)
        logger.info(f"Created chat session {session.id} for document {document.id}")
        return session
    
    def get_session(self, db: Session, session_id: str, user_id: str) -> ChatSession:
        session = db.get(ChatSession, session_id)
        if session is None:
            raise NotFoundError("Chat session not found")
        if session.user_id != user_id:
            logger.warning(f"User {user_id} denied access to chat session {session_id}")
            raise AccessDeniedError("Access denied")
        return session
    
    def list_sessions(self, db: Session, user_id: str) -> List[ChatSession]:
        return (
            db.query(ChatSession)
            .filter(ChatSession.user_id == user_id)
            .order_by(ChatSession.updated_at.desc())
            .all()
        )
    
    def get_messages(self, db: Session, session_id: str, user_id: str) -> List[Message]:
        """All messages of a session in chronological order."""
        session = self.get_session(db, session_id, user_id)
        return (
            db.query(Message)
            .filter(Message.session_id == session.id)
            .order_by(Message.timestamp.asc())
            .all()
        )
    
    def delete_session(self, db: Session, session_id: str, user_id: str) -> None:
        session = self.get_session(db, session_id, user_id)
        db.delete(session)
        db.commit()
        logger.info(f"Deleted chat session {session_id}")
