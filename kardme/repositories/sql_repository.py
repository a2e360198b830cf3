"""High-level data access helpers backed by SQLAlchemy."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select, update

from kardme.db.models import Card, CardBlock
from kardme.db.session import get_session


class SQLRepository:
    """CRUD helpers wrapping the SQLAlchemy session."""

    # -------------------------- cards --------------------------
    def get_card(self, card_id: str) -> Optional[Card]:
        with get_session() as session:
            return session.get(Card, card_id)

    def get_card_by_slug(self, slug: str) -> Optional[Card]:
        with get_session() as session:
            stmt = select(Card).where(Card.slug == slug)
            return session.execute(stmt).scalar_one_or_none()

    def get_published_card_by_slug(self, slug: str) -> Optional[Card]:
        with get_session() as session:
            stmt = select(Card).where(Card.slug == slug, Card.published == True)  # noqa: E712
            return session.execute(stmt).scalar_one_or_none()

    def list_cards(self) -> list[Card]:
        with get_session() as session:
            return session.execute(select(Card).order_by(Card.created_at)).scalars().all()

    def create_card(
        self,
        *,
        user_id: str | None = None,
        name: str = "",
        slug: str | None = None,
        published: bool = False,
        theme: dict | None = None,
    ) -> Card:
        now = datetime.now(timezone.utc)
        entity = Card(
            user_id=user_id,
            name=name,
            slug=slug,
            published=published,
            theme=dict(theme or {}),
            created_at=now,
            updated_at=now,
        )
        with get_session() as session:
            session.add(entity)
            session.commit()
            session.refresh(entity)
            return entity

    def update_card_theme(self, card_id: str, theme: dict) -> None:
        with get_session() as session:
            stmt = (
                update(Card)
                .where(Card.id == card_id)
                .values(theme=dict(theme), updated_at=datetime.now(timezone.utc))
            )
            session.execute(stmt)
            session.commit()

    def update_card_slug(self, card_id: str, slug: str | None) -> None:
        with get_session() as session:
            stmt = (
                update(Card)
                .where(Card.id == card_id)
                .values(slug=slug, updated_at=datetime.now(timezone.utc))
            )
            session.execute(stmt)
            session.commit()

    def set_published(self, card_id: str, published: bool) -> None:
        with get_session() as session:
            stmt = (
                update(Card)
                .where(Card.id == card_id)
                .values(published=bool(published), updated_at=datetime.now(timezone.utc))
            )
            session.execute(stmt)
            session.commit()

    def slug_exists(self, slug: str, exclude_id: str | None = None) -> bool:
        with get_session() as session:
            stmt = select(Card.id).where(Card.slug == slug)
            if exclude_id:
                stmt = stmt.where(Card.id != exclude_id)
            return session.execute(stmt.limit(1)).first() is not None

    # -------------------------- blocks --------------------------
    def add_block(
        self,
        card_id: str,
        block_type: str,
        *,
        settings: dict | None = None,
        style: dict | None = None,
        order: int = 0,
        enabled: bool = True,
    ) -> CardBlock:
        entity = CardBlock(
            card_id=card_id,
            type=block_type,
            settings=dict(settings or {}),
            style=dict(style or {}),
            order=order,
            enabled=enabled,
        )
        with get_session() as session:
            session.add(entity)
            session.commit()
            session.refresh(entity)
            return entity

    def list_enabled_blocks(self, card_id: str) -> list[CardBlock]:
        with get_session() as session:
            stmt = (
                select(CardBlock)
                .where(CardBlock.card_id == card_id, CardBlock.enabled == True)  # noqa: E712
                .order_by(CardBlock.order)
            )
            return session.execute(stmt).scalars().all()
