"""Tests pour les intersections: validation, identité et placements."""

from itertools import permutations

import pytest

from catan_model.app.events import SettlementChangedEvent
from catan_model.engine.board import HexGrid, TilePosition
from catan_model.engine.buildings import Port, SettlementType
from catan_model.engine.intersection import Intersection, InvalidIntersectionError
from catan_model.engine.rules import ResourceType

ORIGIN = TilePosition(0, 0)
EAST = TilePosition(1, 0)
NORTH_EAST = TilePosition(1, -1)
SOUTH_EAST = TilePosition(0, 1)


def corner(board, *positions) -> Intersection:
    intersection = board.get_intersection(*positions)
    assert intersection is not None
    return intersection


class TestIntersectionValidation:
    """Construction d'une intersection."""

    def test_valid_triple_in_any_order_is_equal(self, triangle_grid, triangle_positions):
        built = [Intersection(triangle_grid, *order) for order in permutations(triangle_positions)]
        assert all(intersection == built[0] for intersection in built)
        assert len(set(built)) == 1
        assert built[0] == triangle_grid.intersections[frozenset(triangle_positions)]

    def test_none_position_rejected(self, triangle_grid):
        with pytest.raises(InvalidIntersectionError):
            Intersection(triangle_grid, ORIGIN, EAST, None)

    def test_duplicate_positions_rejected(self, triangle_grid):
        with pytest.raises(InvalidIntersectionError):
            Intersection(triangle_grid, ORIGIN, EAST, EAST)

    @pytest.mark.parametrize(
        "third",
        [TilePosition(2, 0), TilePosition(-1, 0), TilePosition(0, -1)],
    )
    def test_non_neighbouring_positions_rejected(self, triangle_grid, third):
        with pytest.raises(InvalidIntersectionError):
            Intersection(triangle_grid, ORIGIN, EAST, third)

    def test_validation_error_is_value_error(self):
        assert issubclass(InvalidIntersectionError, ValueError)

    def test_equality_ignores_settlement(self, triangle_grid, triangle_positions, alice):
        stored = triangle_grid.intersections[frozenset(triangle_positions)]
        assert stored.place_village(alice, True)
        assert Intersection(triangle_grid, *triangle_positions) == stored


class TestIntersectionTopology:
    """Requêtes de voisinage."""

    def test_connected_edges_of_single_corner(self, triangle_grid, triangle_positions):
        a, b, c = triangle_positions
        intersection = triangle_grid.get_intersection(a, b, c)
        keys = {edge.key for edge in intersection.get_connected_edges()}
        assert keys == {frozenset((a, b)), frozenset((b, c)), frozenset((c, a))}

    def test_connected_edges_on_board(self, board):
        for intersection in board.intersections.values():
            edges = intersection.get_connected_edges()
            assert len(edges) == 3
            for edge in edges:
                assert edge.key <= intersection.key

    def test_adjacent_intersections_share_two_positions(self, board):
        intersection = corner(board, ORIGIN, EAST, NORTH_EAST)
        adjacent = intersection.get_adjacent_intersections()
        assert intersection not in adjacent
        assert len(adjacent) == 3
        for other in adjacent:
            assert len(other.key & intersection.key) == 2

    def test_adjacent_intersections_on_border(self, triangle_grid, triangle_positions):
        intersection = triangle_grid.get_intersection(*triangle_positions)
        assert intersection.get_adjacent_intersections() == set()

    def test_is_connected_to(self, triangle_grid, triangle_positions):
        a, b, c = triangle_positions
        intersection = triangle_grid.get_intersection(a, b, c)
        assert intersection.is_connected_to(a)
        assert intersection.is_connected_to(c, a, b)
        assert intersection.is_connected_to()
        assert not intersection.is_connected_to(a, TilePosition(-1, 0))

    def test_adjacent_tiles(self, triangle_grid, triangle_positions):
        intersection = triangle_grid.get_intersection(*triangle_positions)
        assert intersection.get_adjacent_tile_positions() == frozenset(triangle_positions)
        assert {tile.position for tile in intersection.get_adjacent_tiles()} == set(
            triangle_positions
        )

    def test_get_port(self, triangle_positions):
        a, b, c = triangle_positions
        port = Port.general()
        grid = HexGrid.from_positions(triangle_positions, {frozenset((b, c)): port})
        assert grid.get_intersection(a, b, c).get_port() == port

    def test_get_port_none(self, triangle_grid, triangle_positions):
        assert triangle_grid.get_intersection(*triangle_positions).get_port() is None


class TestSettlementStateMachine:
    """EMPTY -> VILLAGE -> CITY."""

    def test_place_village_ignoring_roads(self, board, alice):
        intersection = corner(board, ORIGIN, EAST, NORTH_EAST)
        assert not intersection.has_settlement()
        assert intersection.place_village(alice, True)
        settlement = intersection.get_settlement()
        assert settlement.owner is alice
        assert settlement.type is SettlementType.VILLAGE
        assert settlement.intersection is intersection
        assert intersection.player_has_settlement(alice)

    def test_second_placement_fails(self, board, alice, bob):
        intersection = corner(board, ORIGIN, EAST, NORTH_EAST)
        assert intersection.place_village(alice, True)
        first = intersection.get_settlement()
        assert not intersection.place_village(bob, True)
        assert not intersection.place_village(alice, True)
        assert intersection.get_settlement() is first

    def test_place_village_requires_connected_road(self, board, alice, bob):
        intersection = corner(board, ORIGIN, EAST, NORTH_EAST)
        assert not intersection.place_village(alice, False)
        assert not intersection.has_settlement()

        board.get_edge(ORIGIN, EAST).set_road_owner(bob)
        assert not intersection.place_village(alice, False)

        board.get_edge(ORIGIN, NORTH_EAST).set_road_owner(alice)
        assert intersection.player_has_connected_road(alice)
        assert intersection.place_village(alice, False)

    def test_upgrade_path(self, board, alice, bob):
        intersection = corner(board, ORIGIN, EAST, NORTH_EAST)
        assert not intersection.upgrade_settlement(alice)

        assert intersection.place_village(alice, True)
        assert not intersection.upgrade_settlement(bob)
        assert intersection.get_settlement().type is SettlementType.VILLAGE

        village = intersection.get_settlement()
        assert intersection.upgrade_settlement(alice)
        city = intersection.get_settlement()
        assert city is not village
        assert city.type is SettlementType.CITY
        assert city.is_city
        assert not village.is_city
        assert city.owner is alice
        assert village.type is SettlementType.VILLAGE

        assert not intersection.upgrade_settlement(alice)
        assert not intersection.upgrade_settlement(bob)
        assert intersection.get_settlement() is city

    def test_settlement_amounts(self):
        assert SettlementType.VILLAGE.resource_amount == 1
        assert SettlementType.CITY.resource_amount == 2

    def test_changes_are_published(self, board, alice):
        received = []
        board.event_bus.subscribe(received.append, SettlementChangedEvent)
        intersection = corner(board, ORIGIN, EAST, NORTH_EAST)

        intersection.place_village(alice, True)
        intersection.upgrade_settlement(alice)
        intersection.upgrade_settlement(alice)

        assert [event.settlement.type for event in received] == [
            SettlementType.VILLAGE,
            SettlementType.CITY,
        ]
        assert received[0].previous is None
        assert received[1].previous is received[0].settlement
        assert all(event.intersection is intersection for event in received)

    def test_failed_placement_publishes_nothing(self, board, alice):
        received = []
        board.event_bus.subscribe(received.append)
        corner(board, ORIGIN, EAST, NORTH_EAST).place_village(alice, False)
        assert received == []


def test_special_port_resource_is_kept(triangle_positions):
    a, b, c = triangle_positions
    grid = HexGrid.from_positions(
        triangle_positions, {frozenset((a, c)): Port.special(ResourceType.BRICK)}
    )
    port = grid.get_intersection(a, b, c).get_port()
    assert port.resource_type is ResourceType.BRICK
    assert port.ratio == 2
