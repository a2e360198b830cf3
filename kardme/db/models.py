"""SQLAlchemy models for cards and their content blocks."""
from __future__ import annotations

import uuid

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    JSON,
    func,
)
from sqlalchemy.orm import relationship

from .session import Base


def _new_id() -> str:
    return str(uuid.uuid4())


class Card(Base):
    __tablename__ = "cards"

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String(64), nullable=True, index=True)
    name = Column(String(255), nullable=False, default="")
    slug = Column(String(64), unique=True, nullable=True)
    published = Column(Boolean, default=False, nullable=False)
    # theme color overrides plus the "background" value
    theme = Column(JSON, default=dict, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    blocks = relationship(
        "CardBlock",
        back_populates="card",
        cascade="all,delete-orphan",
        order_by="CardBlock.order",
    )


class CardBlock(Base):
    __tablename__ = "card_blocks"

    id = Column(String(36), primary_key=True, default=_new_id)
    card_id = Column(String(36), ForeignKey("cards.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(String(64), nullable=False)
    settings = Column(JSON, default=dict, nullable=False)
    style = Column(JSON, default=dict, nullable=False)
    order = Column(Integer, default=0, nullable=False)
    enabled = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    card = relationship("Card", back_populates="blocks")
