"""Évènements publiés lorsque l'état mutable du plateau change."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from catan_model.engine.buildings import Settlement
    from catan_model.engine.edge import Edge
    from catan_model.engine.intersection import Intersection
    from catan_model.engine.player import Player


@dataclass(frozen=True)
class RoadOwnerChangedEvent:
    """Émis après l'affectation (ou le retrait) d'une route sur une arête."""

    edge: "Edge"
    previous_owner: Optional["Player"]
    new_owner: Optional["Player"]


@dataclass(frozen=True)
class SettlementChangedEvent:
    """Émis après la pose d'une colonie ou son amélioration en ville."""

    intersection: "Intersection"
    previous: Optional["Settlement"]
    settlement: "Settlement"
