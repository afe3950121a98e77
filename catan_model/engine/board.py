"""Plateau hexagonal: positions de tuiles et topologie dérivée.

Le plateau reçoit une disposition de tuiles déjà construite (types et numéros
sont choisis ailleurs) et en dérive une seule fois:
- les intersections: triplets de positions deux à deux voisines
- les arêtes: paires de positions voisines

Les dictionnaires sont indexés par `frozenset` de positions, ce qui rend les
recherches indépendantes de l'ordre d'énumération.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import (
    TYPE_CHECKING,
    Dict,
    FrozenSet,
    Hashable,
    Iterable,
    List,
    Mapping,
    Optional,
    Set,
    Tuple,
)

import structlog

from catan_model.app.event_bus import EventBus
from catan_model.engine.buildings import Port, Settlement
from catan_model.engine.edge import Edge
from catan_model.engine.intersection import Intersection
from catan_model.engine.rules import ResourceType

if TYPE_CHECKING:
    from catan_model.engine.player import Player

logger = structlog.get_logger(__name__)

# Directions axiales dans l'ordre du pourtour: deux directions consécutives
# désignent deux voisins eux-mêmes voisins (un coin de l'hexagone).
AXIAL_DIRECTIONS: Tuple[Tuple[int, int], ...] = (
    (1, 0),
    (1, -1),
    (0, -1),
    (-1, 0),
    (-1, 1),
    (0, 1),
)


@dataclass(frozen=True, order=True)
class TilePosition:
    """Coordonnée axiale d'une tuile (q, r); s = -q - r."""

    q: int
    r: int

    @property
    def s(self) -> int:
        return -self.q - self.r

    def neighbours(self) -> List["TilePosition"]:
        """Retourne les 6 positions voisines, dans l'ordre du pourtour."""
        return [TilePosition(self.q + dq, self.r + dr) for dq, dr in AXIAL_DIRECTIONS]

    def is_neighbour(self, other: "TilePosition") -> bool:
        return self.distance(other) == 1

    def distance(self, other: "TilePosition") -> int:
        """Distance hexagonale (nombre de pas entre deux tuiles)."""
        return (
            abs(self.q - other.q) + abs(self.r - other.r) + abs(self.s - other.s)
        ) // 2

    def __str__(self) -> str:
        return f"({self.q}, {self.r})"


@dataclass(frozen=True)
class Tile:
    """Tuile posée par le générateur de plateau.

    `resource` vaut None pour le désert ou l'eau.
    """

    position: TilePosition
    resource: Optional[ResourceType] = None
    roll_number: Optional[int] = None


PositionKey = FrozenSet[TilePosition]


class HexGrid:
    """Propriétaire des tuiles, intersections et arêtes du plateau."""

    def __init__(
        self,
        tiles: Iterable[Tile],
        ports: Optional[Mapping[PositionKey, Port]] = None,
        *,
        event_bus: EventBus | None = None,
    ) -> None:
        self.event_bus: EventBus = event_bus if event_bus is not None else EventBus()
        self.tiles: Dict[TilePosition, Tile] = {}
        for tile in tiles:
            if tile.position in self.tiles:
                raise ValueError(f"Position de tuile dupliquée: {tile.position}")
            self.tiles[tile.position] = tile

        ports = {frozenset(key): port for key, port in (ports or {}).items()}

        self.edges: Dict[PositionKey, Edge] = self._compute_edges(ports)
        unknown = [key for key in ports if key not in self.edges]
        if unknown:
            raise ValueError(
                "Port sur une arête inexistante: "
                + ", ".join(str(sorted(key)) for key in unknown)
            )
        self.intersections: Dict[PositionKey, Intersection] = self._compute_intersections()

        logger.debug(
            "hex_grid_built",
            tiles=len(self.tiles),
            intersections=len(self.intersections),
            edges=len(self.edges),
            ports=len(ports),
        )

    @classmethod
    def from_positions(
        cls,
        positions: Iterable[TilePosition],
        ports: Optional[Mapping[PositionKey, Port]] = None,
        *,
        event_bus: EventBus | None = None,
    ) -> "HexGrid":
        """Construit un plateau dont les tuiles ne portent aucune ressource."""
        return cls(
            (Tile(position) for position in positions), ports, event_bus=event_bus
        )

    # -- Construction de la topologie --
    def _compute_edges(self, ports: Mapping[PositionKey, Port]) -> Dict[PositionKey, Edge]:
        edges: Dict[PositionKey, Edge] = {}
        for position in self.tiles:
            for neighbour in position.neighbours():
                if neighbour not in self.tiles:
                    continue
                key = frozenset((position, neighbour))
                if key not in edges:
                    edges[key] = Edge(self, position, neighbour, port=ports.get(key))
        return edges

    def _compute_intersections(self) -> Dict[PositionKey, Intersection]:
        intersections: Dict[PositionKey, Intersection] = {}
        for position in self.tiles:
            neighbours = position.neighbours()
            for idx, first in enumerate(neighbours):
                second = neighbours[(idx + 1) % len(neighbours)]
                if first not in self.tiles or second not in self.tiles:
                    continue
                key = frozenset((position, first, second))
                if key not in intersections:
                    intersections[key] = Intersection(self, position, first, second)
        return intersections

    # -- API comptage --
    def tile_count(self) -> int:
        return len(self.tiles)

    def intersection_count(self) -> int:
        return len(self.intersections)

    def edge_count(self) -> int:
        return len(self.edges)

    # -- Requêtes --
    def get_tile_at(self, position: TilePosition) -> Optional[Tile]:
        return self.tiles.get(position)

    def get_intersection(self, *positions: TilePosition) -> Optional[Intersection]:
        """Intersection formée par les positions données, dans n'importe quel ordre."""
        return self.intersections.get(frozenset(positions))

    def get_edge(self, *positions: TilePosition) -> Optional[Edge]:
        return self.edges.get(frozenset(positions))

    def get_roads(self, player: "Player") -> Dict[PositionKey, Edge]:
        """Arêtes portant une route du joueur."""
        return {
            key: edge for key, edge in self.edges.items() if edge.road_owner is player
        }

    def get_settlements(self, player: "Player") -> List[Settlement]:
        """Constructions du joueur, toutes intersections confondues."""
        return [
            intersection.get_settlement()
            for intersection in self.intersections.values()
            if intersection.player_has_settlement(player)
        ]

    def get_ports(self) -> Dict[PositionKey, Port]:
        return {key: edge.port for key, edge in self.edges.items() if edge.port is not None}

    # -- Routes --
    def add_road(
        self,
        first: TilePosition,
        second: TilePosition,
        player: "Player",
        check_villages: bool,
    ) -> bool:
        """Pose une route du joueur sur l'arête (first, second).

        Args:
            first: Première tuile de l'arête
            second: Seconde tuile de l'arête
            player: Propriétaire de la route
            check_villages: True pendant la mise en place: la route doit
                toucher une colonie du joueur. Sinon, elle doit prolonger une
                route existante du joueur.

        Returns:
            True si la route a été posée
        """
        edge = self.get_edge(first, second)
        if edge is None or edge.has_road():
            return False

        if check_villages:
            if not any(
                intersection.player_has_settlement(player)
                for intersection in edge.get_intersections()
            ):
                return False
        elif not edge.get_connected_roads(player):
            return False

        edge.set_road_owner(player)
        return True

    def remove_road(self, first: TilePosition, second: TilePosition) -> bool:
        """Retire la route de l'arête; False s'il n'y en avait pas."""
        edge = self.get_edge(first, second)
        if edge is None or not edge.has_road():
            return False
        edge.set_road_owner(None)
        return True

    def get_longest_road(self, player: "Player") -> int:
        """Longueur du plus long chemin de routes du joueur.

        Parcours en profondeur: chaque arête n'est utilisée qu'une fois, et
        une colonie adverse interrompt le chemin.
        """
        roads = self.get_roads(player)
        if not roads:
            return 0

        # Graphe: noeud -> liste de (noeud voisin, clé d'arête)
        graph: Dict[Hashable, List[Tuple[Hashable, PositionKey]]] = {}
        blocked: Set[Hashable] = set()
        for key, edge in roads.items():
            intersections = sorted(
                edge.get_intersections(), key=lambda i: sorted(i.key)
            )
            endpoints: List[Hashable] = [intersection.key for intersection in intersections]
            for intersection in intersections:
                settlement = intersection.get_settlement()
                if settlement is not None and settlement.owner is not player:
                    blocked.add(intersection.key)
            # Arête en bord de plateau: extrémité ouverte propre à l'arête
            while len(endpoints) < 2:
                endpoints.append((key, len(endpoints)))
            first, second = endpoints
            graph.setdefault(first, []).append((second, key))
            graph.setdefault(second, []).append((first, key))

        def dfs(node: Hashable, visited: Set[PositionKey], length: int) -> int:
            if length > 0 and node in blocked:
                return length
            best = length
            for neighbour, edge_key in graph.get(node, []):
                if edge_key in visited:
                    continue
                visited.add(edge_key)
                best = max(best, dfs(neighbour, visited, length + 1))
                visited.remove(edge_key)
            return best

        return max(dfs(node, set(), 0) for node in graph)

    def __repr__(self) -> str:
        return (
            f"HexGrid(tiles={len(self.tiles)}, "
            f"intersections={len(self.intersections)}, "
            f"edges={len(self.edges)})"
        )


__all__ = [
    "AXIAL_DIRECTIONS",
    "TilePosition",
    "Tile",
    "HexGrid",
    "PositionKey",
]
