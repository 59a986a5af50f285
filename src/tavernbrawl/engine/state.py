from __future__ import annotations

import itertools
from collections.abc import Iterator
from dataclasses import dataclass, field

from .types import CardTemplate, Effect, Zone

# Highest minion id handed out by any arena in this process. Arenas without an
# injected id source start counting past it.
_issued_max = 0


@dataclass
class MinionInstance:
    id: int
    template_id: str
    name: str
    attack: int
    hp: int
    max_hp: int
    tier: int
    battlecry: Effect | None = None
    end_of_turn: Effect | None = None
    reborn: bool = False
    used_reborn: bool = False

    @property
    def can_reborn(self) -> bool:
        return self.reborn and not self.used_reborn

    def restore(self) -> None:
        self.hp = self.max_hp
        self.used_reborn = False

    def describe(self) -> str:
        return f"{self.name} ({self.attack}/{self.hp})"


@dataclass
class PlayerState:
    id: int
    gold: int
    health: int
    tavern_tier: int
    upgrade_cost: int
    shop: list[int] = field(default_factory=list)
    hand: list[int] = field(default_factory=list)
    board: list[int] = field(default_factory=list)
    graveyard: list[int] = field(default_factory=list)

    def zone(self, zone: Zone) -> list[int]:
        if zone == "shop":
            return self.shop
        if zone == "hand":
            return self.hand
        if zone == "board":
            return self.board
        if zone == "graveyard":
            return self.graveyard
        raise ValueError(f"Unknown zone: {zone}")

    @property
    def defeated(self) -> bool:
        return self.health <= 0


class MinionArena:
    """Stores every live minion once; player zones hold ids only.

    Moving a minion between zones goes through `transfer`, which removes the
    id from its source list before placing it, so a minion is never owned by
    two zones at once.

    By default ids continue past the highest id issued so far in the process.
    `first_id` records the first id this arena handed out; an arena built with
    `first_id=` counts up from it, which reproduces the ids of an arena that
    spawned the same minions while no other arena was spawning.
    """

    def __init__(self, ids: Iterator[int] | None = None, *, first_id: int | None = None) -> None:
        if ids is None and first_id is not None:
            ids = itertools.count(first_id)
        self._ids = ids
        self.first_id = first_id
        self._minions: dict[int, MinionInstance] = {}

    def _next_id(self) -> int:
        global _issued_max
        minion_id = next(self._ids) if self._ids is not None else _issued_max + 1
        if self.first_id is None:
            self.first_id = minion_id
        _issued_max = max(_issued_max, minion_id)
        return minion_id

    def __contains__(self, minion_id: object) -> bool:
        return minion_id in self._minions

    def get(self, minion_id: int) -> MinionInstance:
        return self._minions[minion_id]

    def spawn(self, template: CardTemplate) -> MinionInstance:
        minion = MinionInstance(
            id=self._next_id(),
            template_id=template.id,
            name=template.name,
            attack=template.attack,
            hp=template.hp,
            max_hp=template.hp,
            tier=template.tier,
            battlecry=template.battlecry,
            end_of_turn=template.end_of_turn,
            reborn=template.reborn,
        )
        self._minions[minion.id] = minion
        return minion

    def discard(self, minion_id: int) -> MinionInstance:
        return self._minions.pop(minion_id)

    def minions(self, ids: list[int]) -> list[MinionInstance]:
        return [self._minions[i] for i in ids]

    def transfer(
        self,
        player: PlayerState,
        src: Zone,
        dst: Zone,
        minion_id: int,
        *,
        index: int | None = None,
    ) -> MinionInstance:
        """Move `minion_id` from one of `player`'s zones to another.

        Appends to `dst` unless `index` is given. Raises ValueError if the id
        is not in `src`.
        """
        src_ids = player.zone(src)
        pos = src_ids.index(minion_id)
        src_ids.pop(pos)
        dst_ids = player.zone(dst)
        if index is None:
            dst_ids.append(minion_id)
        else:
            dst_ids.insert(index, minion_id)
        return self._minions[minion_id]
