"""Noyau de règles: topologie du plateau, placements et joueurs."""

from . import rules  # re-export for convenience
from .board import HexGrid, Tile, TilePosition
from .buildings import Port, Settlement, SettlementType
from .edge import Edge
from .intersection import Intersection, InvalidIntersectionError
from .player import Player, PlayerBuilder

__all__ = [
    "rules",
    "HexGrid",
    "Tile",
    "TilePosition",
    "Port",
    "Settlement",
    "SettlementType",
    "Edge",
    "Intersection",
    "InvalidIntersectionError",
    "Player",
    "PlayerBuilder",
]
