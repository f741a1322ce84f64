import pytest

from airku_planner.exceptions import InvalidArgumentError
from airku_planner.models.domain import DeliveryNode, Location
from airku_planner.services.routing import savings as savings_module
from airku_planner.services.routing.models import Saving
from airku_planner.services.routing.savings import build_routes, compute_savings

DEPOT = Location(0.0, 0.0)


def _node(nid: str, lat: float, lon: float, demand: float = 1.0) -> DeliveryNode:
    return DeliveryNode(id=nid, location=Location(lat, lon), demand=demand)


def _ring(count: int, demand: float) -> list[DeliveryNode]:
    offsets = [(0.01, 0.01), (0.012, 0.011), (-0.01, 0.02), (-0.011, 0.018), (0.02, -0.01), (0.019, -0.013)]
    return [_node(f"N{i}", lat, lon, demand) for i, (lat, lon) in enumerate(offsets[:count])]


def test_no_nodes_no_trips():
    assert build_routes([], DEPOT, 10) == []


def test_nearby_nodes_share_a_trip_when_capacity_allows():
    nodes = [_node("A", 0.01, 0.01, 5), _node("B", 0.01, 0.011, 5)]

    trips = build_routes(nodes, DEPOT, 10)

    assert len(trips) == 1
    assert set(trips[0]) == {"A", "B"}


def test_capacity_blocks_merge():
    nodes = [_node("A", 0.0, 0.0, 5), _node("B", 0.0, 0.001, 5)]

    assert build_routes(nodes, DEPOT, 6) == [["A"], ["B"]]


def test_zero_saving_pair_is_not_merged():
    # A sits on the depot, so serving B via A saves nothing.
    nodes = [_node("A", 0.0, 0.0, 5), _node("B", 0.0, 0.001, 5)]

    assert build_routes(nodes, DEPOT, 10) == [["A"], ["B"]]


def test_every_node_routed_once_and_loads_within_capacity():
    nodes = _ring(6, demand=4)
    demand = {node.id: node.demand for node in nodes}

    trips = build_routes(nodes, DEPOT, 10)

    flattened = [node_id for trip in trips for node_id in trip]
    assert sorted(flattened) == sorted(demand)
    assert all(trip for trip in trips)
    assert all(sum(demand[node_id] for node_id in trip) <= 10 for trip in trips)


def test_oversized_node_stays_alone():
    nodes = [_node("BIG", 0.01, 0.01, 50), _node("S1", 0.01, 0.011, 1), _node("S2", 0.011, 0.011, 1)]

    trips = build_routes(nodes, DEPOT, 10)

    assert ["BIG"] in trips
    assert sorted(node_id for trip in trips for node_id in trip) == ["BIG", "S1", "S2"]


def test_zero_demand_node_is_routed():
    nodes = [_node("A", 0.01, 0.01, 10), _node("Z", 0.01, 0.011, 0)]

    trips = build_routes(nodes, DEPOT, 10)

    assert len(trips) == 1
    assert set(trips[0]) == {"A", "Z"}


def test_result_is_deterministic_for_fixed_input_order():
    nodes = _ring(6, demand=3)

    assert build_routes(nodes, DEPOT, 9) == build_routes(list(nodes), DEPOT, 9)


def test_compute_savings_sorted_descending_with_input_pair_order():
    nodes = _ring(4, demand=1)

    entries = compute_savings(nodes, DEPOT)

    assert len(entries) == 6
    values = [entry.saving for entry in entries]
    assert values == sorted(values, reverse=True)
    index = {node.id: position for position, node in enumerate(nodes)}
    assert all(index[entry.source] < index[entry.target] for entry in entries)


def test_merges_only_at_trip_endpoints(monkeypatch):
    nodes = [_node(nid, 0.01, 0.01) for nid in ("A", "B", "C", "D")]
    crafted = [
        Saving(source="A", target="B", saving=10.0),
        Saving(source="B", target="C", saving=9.0),
        Saving(source="B", target="D", saving=8.0),
        Saving(source="C", target="D", saving=7.0),
    ]
    monkeypatch.setattr(savings_module, "compute_savings", lambda nodes, depot: crafted)

    trips = build_routes(nodes, DEPOT, 100)

    # B is interior once C joins, so the B-D saving is skipped and D attaches at C.
    assert trips == [["D", "C", "B", "A"]]


def test_stops_at_first_non_positive_saving(monkeypatch):
    nodes = [_node(nid, 0.01, 0.01) for nid in ("A", "B", "C", "D")]
    crafted = [
        Saving(source="A", target="B", saving=10.0),
        Saving(source="B", target="D", saving=8.0),
        Saving(source="C", target="D", saving=0.0),
        Saving(source="A", target="C", saving=-1.0),
    ]
    monkeypatch.setattr(savings_module, "compute_savings", lambda nodes, depot: crafted)

    trips = build_routes(nodes, DEPOT, 100)

    assert trips == [["D", "B", "A"], ["C"]]


def test_non_finite_coordinates_rejected_by_default():
    nodes = [_node("A", float("nan"), 0.01), _node("B", 0.01, 0.011)]

    with pytest.raises(InvalidArgumentError):
        build_routes(nodes, DEPOT, 10, validate_coordinates=True)


def test_non_finite_coordinates_never_merge_when_validation_is_off():
    nodes = [_node("A", 0.01, 0.01), _node("B", 0.01, 0.011), _node("X", float("nan"), 0.01)]

    trips = build_routes(nodes, DEPOT, 10, validate_coordinates=False)

    assert ["X"] in trips
    assert any(set(trip) == {"A", "B"} for trip in trips)


def test_invalid_nodes_are_rejected():
    with pytest.raises(InvalidArgumentError):
        build_routes([_node("A", 0.01, 0.01, -1)], DEPOT, 10)
    with pytest.raises(InvalidArgumentError):
        build_routes([_node("A", 0.01, 0.01), _node("A", 0.02, 0.02)], DEPOT, 10)
