"""Fixtures partagées: dispositions de plateau et joueurs."""

from __future__ import annotations

from typing import Callable, List, Mapping, Optional

import pytest

from catan_model.engine.board import HexGrid, PositionKey, TilePosition
from catan_model.engine.buildings import Port
from catan_model.engine.player import Player, PlayerBuilder


def hex_positions(radius: int) -> List[TilePosition]:
    """Positions d'un plateau hexagonal de rayon `radius` (1 + 3r(r+1) tuiles)."""
    positions: List[TilePosition] = []
    for q in range(-radius, radius + 1):
        for r in range(max(-radius, -q - radius), min(radius, -q + radius) + 1):
            positions.append(TilePosition(q, r))
    return positions


@pytest.fixture
def triangle_positions():
    """Trois tuiles deux à deux voisines."""
    return TilePosition(0, 0), TilePosition(1, 0), TilePosition(1, -1)


@pytest.fixture
def triangle_grid(triangle_positions) -> HexGrid:
    return HexGrid.from_positions(triangle_positions)


@pytest.fixture
def grid_factory() -> Callable[..., HexGrid]:
    def build(radius: int, ports: Optional[Mapping[PositionKey, Port]] = None) -> HexGrid:
        return HexGrid.from_positions(hex_positions(radius), ports)

    return build


@pytest.fixture
def board(grid_factory) -> HexGrid:
    """Plateau standard de 19 tuiles, sans port."""
    return grid_factory(2)


@pytest.fixture
def alice(board) -> Player:
    return PlayerBuilder(1).name("Alice").color((200, 30, 30)).build(board)


@pytest.fixture
def bob(board) -> Player:
    return PlayerBuilder(2).name("Bob").color((30, 30, 200)).build(board)
