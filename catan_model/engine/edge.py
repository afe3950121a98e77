"""Arêtes: liaison entre deux tuiles voisines, support des routes et ports."""

from __future__ import annotations

from typing import TYPE_CHECKING, FrozenSet, Optional, Set

import structlog

from catan_model.app.events import RoadOwnerChangedEvent
from catan_model.engine.buildings import Port

if TYPE_CHECKING:
    from catan_model.engine.board import HexGrid, TilePosition
    from catan_model.engine.intersection import Intersection
    from catan_model.engine.player import Player

logger = structlog.get_logger(__name__)


class Edge:
    """Arête identifiée par la paire non ordonnée de ses tuiles.

    Le port est fixé à la construction; le propriétaire de route est un
    champ mutable dont chaque changement est publié sur le bus du plateau.
    """

    __slots__ = ("_grid", "position1", "position2", "_key", "port", "_road_owner")

    def __init__(
        self,
        grid: "HexGrid",
        position1: "TilePosition",
        position2: "TilePosition",
        port: Optional[Port] = None,
    ) -> None:
        if position1 is None or position2 is None:
            raise ValueError("Positions must not be None")
        if position2 not in position1.neighbours():
            raise ValueError(f"Positions must be neighbours: {position1}, {position2}")

        self._grid = grid
        self.position1 = position1
        self.position2 = position2
        self._key: FrozenSet["TilePosition"] = frozenset((position1, position2))
        self.port: Optional[Port] = port
        self._road_owner: Optional["Player"] = None

    @property
    def grid(self) -> "HexGrid":
        return self._grid

    @property
    def key(self) -> FrozenSet["TilePosition"]:
        return self._key

    def get_adjacent_tile_positions(self) -> FrozenSet["TilePosition"]:
        return self._key

    # -- Port --
    def has_port(self) -> bool:
        return self.port is not None

    # -- Route --
    @property
    def road_owner(self) -> Optional["Player"]:
        return self._road_owner

    def has_road(self) -> bool:
        return self._road_owner is not None

    def set_road_owner(self, player: Optional["Player"]) -> None:
        """Affecte (ou retire avec None) le propriétaire de la route."""
        previous = self._road_owner
        if previous is player:
            return
        self._road_owner = player
        logger.debug(
            "road_owner_changed",
            edge=str(self),
            previous=previous.name if previous is not None else None,
            owner=player.name if player is not None else None,
        )
        self._grid.event_bus.publish(
            RoadOwnerChangedEvent(edge=self, previous_owner=previous, new_owner=player)
        )

    # -- Connexité --
    def get_intersections(self) -> Set["Intersection"]:
        """Intersections dont les positions contiennent celles de l'arête."""
        intersections = self._grid.intersections
        common = set(self.position1.neighbours()) & set(self.position2.neighbours())
        result: Set["Intersection"] = set()
        for third in common:
            intersection = intersections.get(self._key | {third})
            if intersection is not None:
                result.add(intersection)
        return result

    def connects_to(self, other: "Edge") -> bool:
        """Vrai si les deux arêtes partagent une intersection."""
        return bool(self.get_intersections() & other.get_intersections())

    def get_connected_roads(self, player: "Player") -> Set["Edge"]:
        """Routes du joueur partageant une intersection avec cette arête."""
        roads: Set[Edge] = set()
        for intersection in self.get_intersections():
            for edge in intersection.get_connected_edges():
                if edge != self and edge.road_owner == player:
                    roads.add(edge)
        return roads

    # -- Identité par valeur --
    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Edge):
            return NotImplemented
        return self._key == other._key

    def __hash__(self) -> int:
        return hash(self._key)

    def __str__(self) -> str:
        first, second = sorted(self._key)
        return f"{{{first}, {second}}}"

    def __repr__(self) -> str:
        return f"Edge{self}"


__all__ = ["Edge"]
