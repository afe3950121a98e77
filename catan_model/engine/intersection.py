"""Intersections: coins partagés par trois tuiles voisines."""

from __future__ import annotations

from itertools import combinations
from typing import TYPE_CHECKING, FrozenSet, List, Optional, Set

import structlog

from catan_model.app.events import SettlementChangedEvent
from catan_model.engine.buildings import Port, Settlement, SettlementType

if TYPE_CHECKING:
    from catan_model.engine.board import HexGrid, Tile, TilePosition
    from catan_model.engine.edge import Edge
    from catan_model.engine.player import Player

logger = structlog.get_logger(__name__)


class InvalidIntersectionError(ValueError):
    """Triplet de positions ne formant pas un coin du plateau."""


class Intersection:
    """Coin du plateau identifié par ses trois tuiles adjacentes.

    L'identité (égalité, hash) dépend uniquement de l'ensemble des trois
    positions; la colonie éventuelle est un emplacement mutable à part.
    """

    __slots__ = ("_grid", "_positions", "_key", "_settlement")

    def __init__(
        self,
        grid: "HexGrid",
        position0: "TilePosition",
        position1: "TilePosition",
        position2: "TilePosition",
    ) -> None:
        positions = (position0, position1, position2)
        if any(position is None for position in positions):
            raise InvalidIntersectionError("Positions must not be None")
        if len(set(positions)) != 3:
            raise InvalidIntersectionError(
                f"Positions must not be equal: {position0}, {position1}, {position2}"
            )
        for first, second in combinations(positions, 2):
            if second not in first.neighbours():
                raise InvalidIntersectionError(
                    f"Positions must be neighbours: {position0}, {position1}, {position2}"
                )

        self._grid = grid
        self._positions = positions
        self._key: FrozenSet["TilePosition"] = frozenset(positions)
        self._settlement: Optional[Settlement] = None

    @property
    def grid(self) -> "HexGrid":
        return self._grid

    @property
    def key(self) -> FrozenSet["TilePosition"]:
        """Clé de valeur utilisée par `HexGrid.intersections`."""
        return self._key

    # -- Emplacement de colonie --
    def get_settlement(self) -> Optional[Settlement]:
        return self._settlement

    def has_settlement(self) -> bool:
        return self._settlement is not None

    def player_has_settlement(self, player: "Player") -> bool:
        return self._settlement is not None and self._settlement.owner == player

    def place_village(self, player: "Player", ignore_road_check: bool) -> bool:
        """Place une colonie du joueur si l'intersection est libre.

        Args:
            player: Propriétaire de la colonie
            ignore_road_check: True pendant la mise en place (aucune route
                requise)

        Returns:
            True si la colonie a été placée
        """
        if self._settlement is not None:
            return False
        if not ignore_road_check and not self.player_has_connected_road(player):
            return False

        self._settlement = Settlement(player, SettlementType.VILLAGE, self)
        logger.debug("village_placed", player=player.name, intersection=str(self))
        self._grid.event_bus.publish(
            SettlementChangedEvent(intersection=self, previous=None, settlement=self._settlement)
        )
        return True

    def upgrade_settlement(self, player: "Player") -> bool:
        """Transforme la colonie du joueur en ville.

        Returns:
            True si l'amélioration a eu lieu; False si l'intersection est
            vide, appartient à un autre joueur ou porte déjà une ville.
        """
        previous = self._settlement
        if previous is None or previous.owner != player:
            return False
        if previous.type is SettlementType.CITY:
            return False

        self._settlement = Settlement(player, SettlementType.CITY, self)
        logger.debug("settlement_upgraded", player=player.name, intersection=str(self))
        self._grid.event_bus.publish(
            SettlementChangedEvent(intersection=self, previous=previous, settlement=self._settlement)
        )
        return True

    # -- Topologie --
    def get_adjacent_tile_positions(self) -> FrozenSet["TilePosition"]:
        return self._key

    def get_adjacent_tiles(self) -> List["Tile"]:
        return [
            self._grid.tiles[position]
            for position in sorted(self._key)
            if position in self._grid.tiles
        ]

    def get_connected_edges(self) -> Set["Edge"]:
        """Arêtes (au plus trois) dont la paire est incluse dans ce coin."""
        edges = self._grid.edges
        return {
            edges[frozenset(pair)]
            for pair in combinations(self._positions, 2)
            if frozenset(pair) in edges
        }

    def get_port(self) -> Optional[Port]:
        for edge in self.get_connected_edges():
            if edge.has_port():
                return edge.port
        return None

    def player_has_connected_road(self, player: "Player") -> bool:
        return any(
            edge.has_road() and edge.road_owner == player
            for edge in self.get_connected_edges()
        )

    def get_adjacent_intersections(self) -> Set["Intersection"]:
        """Intersections partageant au moins deux positions avec celle-ci."""
        adjacent: Set[Intersection] = set()
        for first, second in combinations(self._positions, 2):
            # Le troisième sommet d'un coin contenant (first, second) est
            # forcément un voisin commun des deux.
            for third in set(first.neighbours()) & set(second.neighbours()):
                key = frozenset((first, second, third))
                if key == self._key:
                    continue
                other = self._grid.intersections.get(key)
                if other is not None:
                    adjacent.add(other)
        return adjacent

    def is_connected_to(self, *positions: "TilePosition") -> bool:
        return all(position in self._key for position in positions)

    # -- Identité par valeur --
    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Intersection):
            return NotImplemented
        return self._key == other._key

    def __hash__(self) -> int:
        return hash(self._key)

    def __str__(self) -> str:
        return "{" + ", ".join(str(position) for position in sorted(self._key)) + "}"

    def __repr__(self) -> str:
        return f"Intersection{self}"


__all__ = ["Intersection", "InvalidIntersectionError"]
