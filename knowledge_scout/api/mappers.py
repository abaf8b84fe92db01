"""
Mappers between ORM models and DTOs.
Separates persistence layer from API layer.
"""
from typing import List

from ..models import ChatSession, Document, Message, User
from .dto import (
    ChatMessageDTO,
    ChatSessionDTO,
    DocumentDTO,
    DocumentSummaryDTO,
    UserDTO,
)


class DocumentMapper:
    """Maps between Document model and document DTOs."""
    
    @staticmethod
    def to_dto(document: Document) -> DocumentDTO:
        return DocumentDTO(
            id=document.id,
            title=document.title,
            filename=document.filename,
            original_name=document.original_name,
            file_size=document.file_size,
            mime_type=document.mime_type,
            status=document.status,
            extracted_text=document.extracted_text,
            summary=document.summary,
            metadata=document.doc_metadata,
            created_at=document.created_at,
            updated_at=document.updated_at,
        )
    
    @staticmethod
    def to_summary_dto(document: Document) -> DocumentSummaryDTO:
        return DocumentSummaryDTO.model_validate(document)
    
    @staticmethod
    def to_dto_list(documents: List[Document]) -> List[DocumentDTO]:
        """Convert list of models to DTOs."""
        return [DocumentMapper.to_dto(doc) for doc in documents]


class ChatMapper:
    """Maps chat sessions and messages to DTOs."""
    
    @staticmethod
    def session_to_dto(session: ChatSession) -> ChatSessionDTO:
        return ChatSessionDTO.model_validate(session)
    
    @staticmethod
    def message_to_dto(message: Message) -> ChatMessageDTO:
        return ChatMessageDTO.model_validate(message)
    
    @staticmethod
    def messages_to_dto_list(messages: List[Message]) -> List[ChatMessageDTO]:
        return [ChatMapper.message_to_dto(m) for m in messages]


class UserMapper:
    
    @staticmethod
    def to_dto(user: User) -> UserDTO:
        return UserDTO.model_validate(user)
