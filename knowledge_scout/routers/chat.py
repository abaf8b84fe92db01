"""
Chat Router - Question answering over a single document.

Example Usage:
    POST /chat/sessions - Start a session (optionally with a first question)
    GET /chat/sessions - List sessions
    GET /chat/sessions/{session_id} - Get a session
    POST /chat/sessions/{session_id}/messages - Ask a question
    GET /chat/sessions/{session_id}/messages - Conversation history
    DELETE /chat/sessions/{session_id} - Delete a session and its messages
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..api.dto import (
    ChatMessageListDTO,
    ChatSessionDTO,
    ChatSessionListDTO,
    CreateSessionRequestDTO,
    CreateSessionResponseDTO,
    ExchangeDTO,
    MessageResponseDTO,
    SendMessageRequestDTO,
)
from ..api.mappers import ChatMapper
from ..models import User
from ..services.chat_service import ChatService, Exchange
from .dependencies import get_chat_service, get_current_user, get_db

router = APIRouter(prefix="/chat")


def _exchange_to_dto(exchange: Exchange) -> ExchangeDTO:
    return ExchangeDTO(
        user_message=ChatMapper.message_to_dto(exchange.user_message),
        assistant_message=ChatMapper.message_to_dto(exchange.assistant_message),
        sources=exchange.sources,
        confidence=exchange.confidence,
    )


@router.post("/sessions", response_model=CreateSessionResponseDTO, status_code=status.HTTP_201_CREATED)
async def create_session(
    payload: CreateSessionRequestDTO,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    chat_service: ChatService = Depends(get_chat_service),
):
    """
    Start a chat session about a completed document.
    
    If `question` is given it is answered immediately and returned as `exchange`.
    
    Status Codes:
        201: Created
        400: Document is not completed yet
        403/404: Ownership or existence check failed
        503: AI service unavailable while answering the first question
    """
    session = chat_service.create_session(db, current_user.id, payload.document_id, payload.title)
    exchange = None
    if payload.question:
        exchange = _exchange_to_dto(await chat_service.ask(db, session, payload.question))
    return CreateSessionResponseDTO(session=ChatMapper.session_to_dto(session), exchange=exchange)


@router.get("/sessions", response_model=ChatSessionListDTO)
async def list_sessions(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    chat_service: ChatService = Depends(get_chat_service),
):
    sessions = chat_service.list_sessions(db, current_user.id)
    return ChatSessionListDTO(sessions=[ChatMapper.session_to_dto(s) for s in sessions])


@router.get("/sessions/{session_id}", response_model=ChatSessionDTO)
async def get_session(
    session_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    chat_service: ChatService = Depends(get_chat_service),
):
    return ChatMapper.session_to_dto(chat_service.get_session(db, session_id, current_user.id))


@router.post("/sessions/{session_id}/messages", response_model=ExchangeDTO)
async def send_message(
    session_id: str,
    payload: SendMessageRequestDTO,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    chat_service: ChatService = Depends(get_chat_service),
):
    """
    Ask a question in an existing session.
    
    The question is stored before the AI is called. If the AI call fails
    the response is 503 and only the question remains in the history.
    
    Returns:
        ExchangeDTO: Stored question, stored answer, sources and confidence
    """
    session = chat_service.get_session(db, session_id, current_user.id)
    exchange = await chat_service.ask(db, session, payload.content)
    return _exchange_to_dto(exchange)


@router.get("/sessions/{session_id}/messages", response_model=ChatMessageListDTO)
async def get_messages(
    session_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    chat_service: ChatService = Depends(get_chat_service),
):
    messages = chat_service.get_messages(db, session_id, current_user.id)
    return ChatMessageListDTO(messages=ChatMapper.messages_to_dto_list(messages))


@router.delete("/sessions/{session_id}", response_model=MessageResponseDTO)
async def delete_session(
    session_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    chat_service: ChatService = Depends(get_chat_service),
):
    chat_service.delete_session(db, session_id, current_user.id)
    return MessageResponseDTO(message="Chat session deleted successfully")
