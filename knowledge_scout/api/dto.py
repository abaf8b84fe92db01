"""
Data Transfer Objects (DTOs) for API layer.
Separates API contracts from ORM models. Field names are camelCase on the wire.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# Auth

class RegisterRequestDTO(CamelModel):
    email: str = Field(..., min_length=3, max_length=320)
    name: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=6, max_length=256)


class LoginRequestDTO(CamelModel):
    email: str
    password: str


class UserDTO(CamelModel):
    id: str
    email: str
    name: str
    created_at: datetime


class AuthResponseDTO(CamelModel):
    token: str
    user: UserDTO


# Documents

class DocumentSummaryDTO(CamelModel):
    """Short document view returned right after upload."""
    id: str
    title: str
    filename: str
    file_size: int
    status: str
    created_at: datetime


class DocumentDTO(CamelModel):
    """Full document view."""
    id: str
    title: str
    filename: str
    original_name: str
    file_size: int
    mime_type: str
    status: str
    extracted_text: Optional[str] = None
    summary: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
    created_at: datetime
    updated_at: datetime


class UploadResponseDTO(CamelModel):
    message: str
    document: DocumentSummaryDTO


class DocumentListDTO(CamelModel):
    documents: List[DocumentDTO]


class DocumentEnvelopeDTO(CamelModel):
    document: DocumentDTO


class ReprocessResponseDTO(CamelModel):
    message: str
    document_id: str
    status: str


class ExtractionPreviewDTO(CamelModel):
    document_id: str
    mime_type: str
    extracted_text: str
    extracted_text_length: int
    current_status: str
    current_extracted_text: Optional[str] = None
    current_summary: Optional[str] = None


class MessageResponseDTO(CamelModel):
    message: str


# Chat

class CreateSessionRequestDTO(CamelModel):
    document_id: str
    title: Optional[str] = Field(None, max_length=512)
    question: Optional[str] = Field(None, min_length=1)


class SendMessageRequestDTO(CamelModel):
    content: str = Field(..., min_length=1)


class ChatMessageDTO(CamelModel):
    id: str
    content: str
    role: str
    timestamp: datetime


class ChatSessionDTO(CamelModel):
    id: str
    title: Optional[str] = None
    document_id: str
    created_at: datetime
    updated_at: datetime


class ExchangeDTO(CamelModel):
    """A question and the answer it produced."""
    user_message: ChatMessageDTO
    assistant_message: ChatMessageDTO
    sources: List[str]
    confidence: float


class CreateSessionResponseDTO(CamelModel):
    session: ChatSessionDTO
    exchange: Optional[ExchangeDTO] = None


class ChatSessionListDTO(CamelModel):
    sessions: List[ChatSessionDTO]


class ChatMessageListDTO(CamelModel):
    messages: List[ChatMessageDTO]
