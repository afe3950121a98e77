"""Joueur: registre de ressources, cartes développement et ratios d'échange.

Le joueur ne possède aucune intersection ni arête: ses constructions et
routes sont relues sur le plateau à chaque requête.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Mapping, Optional, Tuple

import numpy as np
import structlog

from catan_model.engine.buildings import Settlement
from catan_model.engine.rules import (
    BANK_TRADE_RATIO,
    GENERAL_PORT_RATIO,
    MAX_CITIES,
    MAX_ROADS,
    MAX_VILLAGES,
    NUM_RESOURCES,
    SPECIAL_PORT_RATIO,
    VICTORY_POINTS_PER_CARD,
    DevelopmentCardType,
    ResourceType,
)

if TYPE_CHECKING:
    from catan_model.engine.board import HexGrid
    from catan_model.engine.edge import Edge

logger = structlog.get_logger(__name__)

Color = Tuple[int, int, int]


@dataclass(eq=False)
class Player:
    """État d'un joueur lié à un plateau.

    Les ressources sont stockées dans un tableau numpy indexé par
    `ResourceType`; chaque compteur reste positif ou nul. Deux joueurs ne
    sont égaux que s'il s'agit du même objet.
    """

    grid: "HexGrid" = field(repr=False)
    player_id: int
    name: str
    color: Color
    ai: bool = False

    resources: np.ndarray = field(
        default_factory=lambda: np.zeros(NUM_RESOURCES, dtype=np.int32), repr=False
    )
    development_cards: Dict[DevelopmentCardType, int] = field(
        default_factory=dict, repr=False
    )
    played_development_cards: Dict[DevelopmentCardType, int] = field(
        default_factory=dict, repr=False
    )

    # -- Ressources --
    def get_resources(self) -> Dict[ResourceType, int]:
        """Copie des compteurs de ressources (toutes les ressources présentes)."""
        return {resource: int(self.resources[resource]) for resource in ResourceType}

    def total_resources(self) -> int:
        return int(np.sum(self.resources))

    def add_resource(self, resource: ResourceType, amount: int) -> None:
        if amount < 0:
            raise ValueError(f"Quantité négative pour {resource.name}: {amount}")
        # Le tableau numpy déborderait silencieusement vers un compte négatif
        if int(self.resources[resource]) + amount > np.iinfo(self.resources.dtype).max:
            raise ValueError(f"Capacité dépassée pour {resource.name}: +{amount}")
        self.resources[resource] += amount

    def add_resources(self, resources: Mapping[ResourceType, int]) -> None:
        if any(amount < 0 for amount in resources.values()):
            raise ValueError(f"Quantités négatives: {dict(resources)}")
        limit = np.iinfo(self.resources.dtype).max
        if any(int(self.resources[r]) + amount > limit for r, amount in resources.items()):
            raise ValueError(f"Capacité dépassée: {dict(resources)}")
        for resource, amount in resources.items():
            self.resources[resource] += amount

    def has_resources(self, resources: Mapping[ResourceType, int]) -> bool:
        """Vérifie que le joueur possède au moins les quantités demandées."""
        return all(
            self.resources[resource] >= amount for resource, amount in resources.items()
        )

    def remove_resource(self, resource: ResourceType, amount: int) -> bool:
        """Retire des ressources; False (sans effet) si le stock est insuffisant."""
        if amount < 0:
            raise ValueError(f"Quantité négative pour {resource.name}: {amount}")
        if self.resources[resource] < amount:
            return False
        self.resources[resource] -= amount
        return True

    def remove_resources(self, resources: Mapping[ResourceType, int]) -> bool:
        """Retrait tout-ou-rien de plusieurs ressources."""
        if any(amount < 0 for amount in resources.values()):
            raise ValueError(f"Quantités négatives: {dict(resources)}")
        if not self.has_resources(resources):
            return False
        for resource, amount in resources.items():
            self.resources[resource] -= amount
        return True

    def can_select_resources(
        self,
        selection: Mapping[ResourceType, int],
        amount: int,
        available: Optional[Mapping[ResourceType, int]] = None,
        drop: bool = False,
    ) -> bool:
        """Valide une sélection de ressources (choix ou défausse).

        Args:
            selection: Quantités choisies par ressource
            amount: Total exact attendu
            available: Réserve dans laquelle choisir; None signifie un choix
                libre parmi toutes les ressources
            drop: True pour une défausse: la sélection doit aussi tenir dans
                la main du joueur

        Returns:
            True si la sélection totalise `amount` sans dépasser la réserve
        """
        if any(count < 0 for count in selection.values()):
            return False
        if sum(selection.values()) != amount:
            return False
        if drop and not self.has_resources(selection):
            return False
        if available is None:
            return True
        return all(
            available.get(resource, 0) >= count
            for resource, count in selection.items()
            if count > 0
        )

    # -- Ports --
    def _port_ratios(self, resource: ResourceType) -> Tuple[bool, bool]:
        """(port spécialisé pour la ressource, port générique) accessibles."""
        special = general = False
        for settlement in self.get_settlements():
            port = settlement.intersection.get_port()
            if port is None:
                continue
            if not port.applies_to(resource):
                continue
            if not port.is_general and port.ratio == SPECIAL_PORT_RATIO:
                special = True
            elif port.is_general and port.ratio == GENERAL_PORT_RATIO:
                general = True
        return special, general

    def get_trade_ratio(self, resource: ResourceType) -> int:
        """Ratio d'échange avec la banque: 2 (port spécialisé), 3 (générique) ou 4."""
        special, general = self._port_ratios(resource)
        if special:
            return SPECIAL_PORT_RATIO
        if general:
            return GENERAL_PORT_RATIO
        return BANK_TRADE_RATIO

    # -- Constructions (relues sur le plateau) --
    def get_settlements(self) -> List[Settlement]:
        return self.grid.get_settlements(self)

    def get_roads(self) -> List["Edge"]:
        return list(self.grid.get_roads(self).values())

    def get_remaining_roads(self) -> int:
        return MAX_ROADS - len(self.grid.get_roads(self))

    def get_remaining_villages(self) -> int:
        return MAX_VILLAGES - sum(
            1 for s in self.get_settlements() if not s.is_city
        )

    def get_remaining_cities(self) -> int:
        return MAX_CITIES - sum(
            1 for s in self.get_settlements() if s.is_city
        )

    def get_victory_points(self) -> int:
        """Points des constructions plus cartes point de victoire en main."""
        building_points = sum(s.type.resource_amount for s in self.get_settlements())
        card_points = (
            self.development_cards.get(DevelopmentCardType.VICTORY_POINT, 0)
            * VICTORY_POINTS_PER_CARD
        )
        return building_points + card_points

    # -- Cartes développement --
    def get_development_cards(self) -> Dict[DevelopmentCardType, int]:
        return dict(self.development_cards)

    def add_development_card(self, card: DevelopmentCardType) -> None:
        self.development_cards[card] = self.development_cards.get(card, 0) + 1

    def remove_development_card(self, card: DevelopmentCardType) -> bool:
        """Joue une carte: la retire de la main et la compte comme jouée."""
        held = self.development_cards.get(card, 0)
        if held <= 0:
            return False
        self.development_cards[card] = held - 1
        self.played_development_cards[card] = self.played_development_cards.get(card, 0) + 1
        logger.debug("development_card_played", player=self.name, card=card.name)
        return True

    def get_total_development_cards(self) -> int:
        return sum(self.development_cards.values())

    def get_knights_played(self) -> int:
        return self.played_development_cards.get(DevelopmentCardType.KNIGHT, 0)

    def __str__(self) -> str:
        return f"Player {self.player_id} {self.name} ({self.color})"


@dataclass
class PlayerBuilder:
    """Configuration d'un joueur, complétée avant que le plateau n'existe.

    Les setters retournent le builder pour permettre le chaînage.
    """

    player_id: int
    player_name: Optional[str] = None
    player_color: Optional[Color] = None
    is_ai: bool = False

    def __post_init__(self) -> None:
        self.color(self.player_color)

    def color(self, color: Optional[Color]) -> "PlayerBuilder":
        """Fixe la couleur; None tire une couleur RGB au hasard."""
        if color is None:
            color = (random.randrange(256), random.randrange(256), random.randrange(256))
        self.player_color = color
        return self

    def name(self, name: Optional[str]) -> "PlayerBuilder":
        self.player_name = name
        return self

    def id(self, player_id: int) -> "PlayerBuilder":
        self.player_id = player_id
        return self

    def ai(self, is_ai: bool) -> "PlayerBuilder":
        self.is_ai = is_ai
        return self

    def name_or_default(self) -> str:
        return self.player_name if self.player_name is not None else f"Player{self.player_id}"

    def build(self, grid: "HexGrid") -> Player:
        player = Player(
            grid=grid,
            player_id=self.player_id,
            name=self.name_or_default(),
            color=self.player_color,
            ai=self.is_ai,
        )
        logger.debug("player_built", player_id=player.player_id, name=player.name, ai=player.ai)
        return player


__all__ = ["Player", "PlayerBuilder", "Color"]
