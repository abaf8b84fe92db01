import enum

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from ..services.database import Base
from .base import generate_id, utcnow


class DocumentStatus(str, enum.Enum):
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


class Document(Base):
    """
    SQLAlchemy model for an uploaded file and its derived text and summary.

    `status` starts at processing and ends at completed or error. Only an
    explicit reprocess moves it back to processing.
    """
    __tablename__ = "documents"

    id = Column(String(36), primary_key=True, default=generate_id)
    title = Column(String(512), nullable=False)
    filename = Column(String(512), nullable=False)  # Stored name
    original_name = Column(String(512), nullable=False)  # Name the user uploaded
    file_path = Column(String(1024), nullable=False)  # Storage reference
    file_size = Column(Integer, nullable=False)
    mime_type = Column(String(255), nullable=False)
    status = Column(String(32), nullable=False, default=DocumentStatus.PROCESSING.value)
    extracted_text = Column(Text, nullable=True)
    summary = Column(Text, nullable=True)
    # "metadata" is reserved on declarative classes
    doc_metadata = Column("metadata", JSON, nullable=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    user = relationship("User", back_populates="documents")
    chat_sessions = relationship(
        "ChatSession",
        back_populates="document",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def is_completed(self) -> bool:
        return self.status == DocumentStatus.COMPLETED.value
