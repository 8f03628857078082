"""Conversation Message Domain Entity

Read-only view of the conversation store, used for per-agent message counts.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import String
from src.domain.base import BaseModel, BigIntegerPK, UTCDateTime, utcnow


class ConversationMessage(BaseModel, table=True):
    __tablename__ = "conversation_messages"
    __table_args__ = (
        Index('ix_conversation_messages_tenant_role', 'tenant_id', 'role'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntegerPK, primary_key=True, autoincrement=True),
    )

    tenant_id: str = Field(sa_column=Column(String(128), nullable=False))

    conversation_id: str = Field(sa_column=Column(String(128), nullable=False))

    role: str = Field(sa_column=Column(String(32), nullable=False))

    agent_id: Optional[str] = Field(default=None, sa_column=Column(String(128), nullable=True))

    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(UTCDateTime, nullable=False),
    )
