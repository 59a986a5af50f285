from __future__ import annotations

import json
from pathlib import Path
from typing import Mapping

from jsonschema import Draft202012Validator

from tavernbrawl.engine.types import BuffEffect, CardTemplate, Effect, HealEffect, TemplateCatalog


class ContentError(RuntimeError):
    pass


def _load_json(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ContentError(f"Missing content file: {path}") from e
    except json.JSONDecodeError as e:
        raise ContentError(f"Invalid JSON in {path}: {e}") from e


def validate_json(instance: object, schema: object, *, context: str) -> None:
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(instance), key=lambda e: e.path)
    if errors:
        lines = [f"Schema validation failed for {context}:"]
        for err in errors[:10]:
            loc = "/".join(str(p) for p in err.absolute_path)
            lines.append(f"- {loc}: {err.message}")
        raise ContentError("\n".join(lines))


def _require_str(obj: Mapping[str, object], key: str) -> str:
    v = obj.get(key)
    if not isinstance(v, str):
        raise ContentError(f"Expected string for {key}")
    return v


def _require_int(obj: Mapping[str, object], key: str) -> int:
    v = obj.get(key)
    if not isinstance(v, int) or isinstance(v, bool):
        raise ContentError(f"Expected int for {key}")
    return v


def _parse_effect(raw: object) -> Effect | None:
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise ContentError("Effect must be an object")
    t = raw.get("type")
    if t == "buff":
        return BuffEffect(
            type="buff",
            attack_delta=_require_int(raw, "attack_delta"),
            health_delta=_require_int(raw, "health_delta"),
            target=_require_str(raw, "target"),  # type: ignore[arg-type]
        )
    if t == "heal":
        return HealEffect(
            type="heal",
            amount=_require_int(raw, "amount"),
            target=_require_str(raw, "target"),  # type: ignore[arg-type]
        )
    raise ContentError(f"Unknown effect type: {t}")


def parse_template(item: Mapping[str, object]) -> CardTemplate:
    tier = _require_int(item, "tier") if "tier" in item else 1
    return CardTemplate(
        id=_require_str(item, "id"),
        name=_require_str(item, "name"),
        attack=_require_int(item, "attack"),
        hp=_require_int(item, "hp"),
        tier=tier,
        battlecry=_parse_effect(item.get("battlecry")),
        end_of_turn=_parse_effect(item.get("end_of_turn")),
        reborn=bool(item.get("reborn", False)),
    )


class ContentService:
    def __init__(self, data_dir: Path, schema_dir: Path) -> None:
        self._data_dir = data_dir
        self._schema_dir = schema_dir

    def load_templates(self) -> TemplateCatalog:
        cards_path = self._data_dir / "cards.json"
        schema = _load_json(self._schema_dir / "cards.schema.json")
        raw = _load_json(cards_path)
        validate_json(raw, schema, context=str(cards_path))

        if not isinstance(raw, dict):
            raise ContentError("cards.json must be an object")
        raw_cards = raw.get("cards")
        if not isinstance(raw_cards, list):
            raise ContentError("cards.json.cards must be a list")

        templates: dict[str, CardTemplate] = {}
        for item in raw_cards:
            if not isinstance(item, dict):
                continue
            template = parse_template(item)
            if template.id in templates:
                raise ContentError(f"Duplicate card id: {template.id}")
            templates[template.id] = template
        return TemplateCatalog(templates=templates)

    def validate_all(self) -> None:
        # Load is validation (schema + parse)
        _ = self.load_templates()
