from __future__ import annotations

import json
from pathlib import Path

import pytest

from tavernbrawl.engine.types import BuffEffect, HealEffect
from tavernbrawl.paths import get_paths
from tavernbrawl.services.content import ContentError, ContentService, parse_template


def test_content_schemas_validate() -> None:
    paths = get_paths()
    content = ContentService(paths.data_dir, paths.schema_dir)
    content.validate_all()


def test_catalog_contents() -> None:
    paths = get_paths()
    catalog = ContentService(paths.data_dir, paths.schema_dir).load_templates()

    assert len(catalog.all_ids()) == 9
    squire = catalog.get("squire")
    assert isinstance(squire.battlecry, BuffEffect)
    assert squire.ability_names() == ("Battlecry",)
    assert isinstance(catalog.get("caretaker").end_of_turn, HealEffect)
    assert catalog.get("reborn_whelp").reborn
    assert catalog.get("wall").tier == 1
    assert {t.id for t in catalog.for_tier(1)} == {
        "test_card",
        "test_2",
        "wall",
        "glass_cannon",
        "glass_cannon_2",
        "squire",
    }


def _write_cards(tmp_path: Path, cards: object) -> ContentService:
    paths = get_paths()
    (tmp_path / "cards.json").write_text(json.dumps({"cards": cards}), encoding="utf-8")
    return ContentService(tmp_path, paths.schema_dir)


def test_schema_rejects_zero_hp(tmp_path: Path) -> None:
    content = _write_cards(tmp_path, [{"id": "ghost", "name": "Ghost", "attack": 1, "hp": 0}])
    with pytest.raises(ContentError, match="Schema validation failed"):
        content.load_templates()


def test_schema_rejects_unknown_effect(tmp_path: Path) -> None:
    content = _write_cards(
        tmp_path,
        [{"id": "mage", "name": "Mage", "attack": 1, "hp": 1, "battlecry": {"type": "draw", "count": 1}}],
    )
    with pytest.raises(ContentError):
        content.load_templates()


def test_duplicate_ids_rejected(tmp_path: Path) -> None:
    card = {"id": "wall", "name": "Wall", "attack": 1, "hp": 4}
    content = _write_cards(tmp_path, [card, card])
    with pytest.raises(ContentError, match="Duplicate"):
        content.load_templates()


def test_missing_file(tmp_path: Path) -> None:
    paths = get_paths()
    with pytest.raises(ContentError, match="Missing content file"):
        ContentService(tmp_path, paths.schema_dir).load_templates()


def test_parse_template_tier() -> None:
    assert parse_template({"id": "wall", "name": "Wall", "attack": 1, "hp": 4}).tier == 1
    assert parse_template({"id": "brute", "name": "Brute", "attack": 3, "hp": 3, "tier": 2}).tier == 2
    with pytest.raises(ContentError, match="tier"):
        parse_template({"id": "wall", "name": "Wall", "attack": 1, "hp": 4, "tier": True})
