"""
Smoke tests for the SQLRepository against a temporary SQLite database.
"""
from __future__ import annotations

from kardme.repositories.sql_repository import SQLRepository


def test_card_and_slug_flow(temp_db):
    repo = SQLRepository()
    card = repo.create_card(user_id="user-1", name="Alice")
    assert card.id
    assert card.published is False
    assert card.theme == {}
    assert not repo.slug_exists("alice")
    repo.update_card_slug(card.id, "alice")
    assert repo.slug_exists("alice")
    assert not repo.slug_exists("alice", exclude_id=card.id)
    assert repo.get_card_by_slug("alice").id == card.id


def test_published_lookup(temp_db):
    repo = SQLRepository()
    card = repo.create_card(slug="draft")
    assert repo.get_published_card_by_slug("draft") is None
    repo.set_published(card.id, True)
    assert repo.get_published_card_by_slug("draft").id == card.id


def test_theme_update(temp_db):
    repo = SQLRepository()
    card = repo.create_card(theme={"primary": "#000000"})
    repo.update_card_theme(card.id, {"primary": "#ffffff", "background": {"mode": "solid", "color": "#000"}})
    stored = repo.get_card(card.id)
    assert stored.theme["primary"] == "#ffffff"
    assert stored.theme["background"]["mode"] == "solid"


def test_enabled_blocks_are_ordered(temp_db):
    repo = SQLRepository()
    card = repo.create_card(slug="blocks")
    repo.add_block(card.id, "contact", order=2)
    repo.add_block(card.id, "profile", order=1, settings={"name": "Alice"})
    repo.add_block(card.id, "gallery", order=0, enabled=False)
    blocks = repo.list_enabled_blocks(card.id)
    assert [b.type for b in blocks] == ["profile", "contact"]
    assert blocks[0].settings == {"name": "Alice"}
