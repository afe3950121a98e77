"""Enregistrements immuables référencés par les intersections et arêtes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional

from catan_model.engine.rules import (
    GENERAL_PORT_RATIO,
    SETTLEMENT_RESOURCE_AMOUNTS,
    SPECIAL_PORT_RATIO,
    ResourceType,
)

if TYPE_CHECKING:
    from catan_model.engine.intersection import Intersection
    from catan_model.engine.player import Player


class SettlementType(Enum):
    """Types de constructions posées sur une intersection."""

    VILLAGE = "VILLAGE"
    CITY = "CITY"

    @property
    def resource_amount(self) -> int:
        """Ressources produites (et points de victoire) par ce type."""
        return SETTLEMENT_RESOURCE_AMOUNTS[self.value]


@dataclass(frozen=True)
class Settlement:
    """Construction d'un joueur sur une intersection.

    Jamais modifiée: une amélioration remplace l'instance.
    """

    owner: "Player"
    type: SettlementType
    intersection: "Intersection"

    @property
    def is_city(self) -> bool:
        return self.type is SettlementType.CITY


@dataclass(frozen=True)
class Port:
    """Port d'échange rattaché à une arête.

    Un port générique n'a pas de ressource (ratio 3), un port spécialisé
    lie une ressource au ratio 2.
    """

    ratio: int
    resource_type: Optional[ResourceType] = None

    def __post_init__(self) -> None:
        if self.ratio <= 0:
            raise ValueError(f"Ratio de port invalide: {self.ratio}")

    @classmethod
    def general(cls) -> "Port":
        return cls(ratio=GENERAL_PORT_RATIO)

    @classmethod
    def special(cls, resource_type: ResourceType) -> "Port":
        return cls(ratio=SPECIAL_PORT_RATIO, resource_type=resource_type)

    @property
    def is_general(self) -> bool:
        return self.resource_type is None

    def applies_to(self, resource_type: ResourceType) -> bool:
        """Vrai si le port s'applique à la ressource donnée."""
        return self.is_general or self.resource_type == resource_type


__all__ = ["SettlementType", "Settlement", "Port"]
