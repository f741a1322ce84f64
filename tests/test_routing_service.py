import pytest

from airku_planner.models.domain import Location, RoutableOrder, VehicleAssignment
from airku_planner.services.geospatial import distance
from airku_planner.services.outputs.routing_formatter import routing_result_to_csv, routing_result_to_json
from airku_planner.services.routing import annotate_stop_distances, plan_daily_routes, round_trip_distance_km

DEPOT = Location(-7.8664161, 110.1486773)


def _order(oid: str, store: str, lat: float | None, lon: float | None, demand: float = 10.0) -> RoutableOrder:
    location = Location(lat, lon) if lat is not None else None
    return RoutableOrder(
        order_id=oid,
        store_id=store,
        location=location,
        demand=demand,
        store_name=f"Store {store}",
        address=f"Jl. {store}",
    )


def test_annotate_stop_distances_starts_from_depot():
    first = Location(-7.86, 110.15)
    second = Location(-7.85, 110.16)

    legs = annotate_stop_distances([first, second], DEPOT)

    assert legs == [distance(DEPOT, first), distance(first, second)]
    assert annotate_stop_distances([], DEPOT) == []


def test_round_trip_distance_includes_return_leg():
    stop = Location(-7.86, 110.15)

    assert round_trip_distance_km([stop], DEPOT) == pytest.approx(2 * distance(DEPOT, stop))
    assert round_trip_distance_km([], DEPOT) == 0.0


def test_plan_groups_orders_by_store_into_one_trip():
    orders = [
        _order("O1", "S1", -7.86, 110.15),
        _order("O2", "S2", -7.861, 110.152),
        _order("O3", "S1", -7.86, 110.15),
    ]
    vehicles = [VehicleAssignment(vehicle_id="V1", capacity=100, driver_id="D1")]

    result = plan_daily_routes(orders, vehicles, DEPOT, delivery_date="2024-05-01")

    assert len(result.plans) == 1
    plan = result.plans[0]
    assert plan.vehicle_id == "V1"
    assert plan.driver_id == "D1"
    assert plan.total_load == 30
    assert sorted(plan.store_ids) == ["S1", "S2"]
    assert [stop.sequence for stop in plan.stops] == [1, 2, 3]
    assert sorted(stop.order_id for stop in plan.stops) == ["O1", "O2", "O3"]
    assert plan.stops[0].distance_from_prev_km == pytest.approx(distance(DEPOT, plan.stops[0].location))
    same_store_legs = [
        stop.distance_from_prev_km
        for previous, stop in zip(plan.stops, plan.stops[1:])
        if previous.store_id == stop.store_id
    ]
    assert same_store_legs == [0.0]
    assert result.unrouted_orders == []
    assert result.metadata["routed_orders"] == 3


def test_plan_splits_trips_when_capacity_is_tight():
    orders = [
        _order("O1", "S1", -7.86, 110.15, demand=40),
        _order("O2", "S2", -7.861, 110.152, demand=40),
    ]
    vehicles = [
        VehicleAssignment(vehicle_id="V1", capacity=50),
        VehicleAssignment(vehicle_id="V2", capacity=50),
    ]

    result = plan_daily_routes(orders, vehicles, DEPOT)

    assert [plan.route_id for plan in result.plans] == ["V1_T01", "V1_T02"]
    assert all(plan.total_load <= 50 for plan in result.plans)
    assert result.metadata["trips"] == 2


def test_orders_without_coordinates_are_left_unrouted():
    orders = [_order("O1", "S1", -7.86, 110.15), _order("O2", "S2", None, None)]
    vehicles = [VehicleAssignment(vehicle_id="V1", capacity=100)]

    result = plan_daily_routes(orders, vehicles, DEPOT)

    assert [order.order_id for order in result.unrouted_orders] == ["O2"]
    assert [stop.order_id for plan in result.plans for stop in plan.stops] == ["O1"]


def test_plan_uses_configured_depot_when_none_given():
    orders = [_order("O1", "S1", -7.86, 110.15)]

    result = plan_daily_routes(orders, [VehicleAssignment(vehicle_id="V1", capacity=100)])

    assert result.metadata["depot"] == {"latitude": -7.8664161, "longitude": 110.1486773}


def test_formatters_emit_every_stop():
    orders = [_order("O1", "S1", -7.86, 110.15), _order("O2", "S2", -7.861, 110.152)]
    result = plan_daily_routes(orders, [VehicleAssignment(vehicle_id="V1", capacity=100)], DEPOT)

    payload = routing_result_to_json(result)
    csv_text = routing_result_to_csv(result)

    assert len(payload["plans"][0]["stops"]) == 2
    assert payload["plans"][0]["stops"][0]["location"].keys() == {"latitude", "longitude"}
    lines = csv_text.strip().splitlines()
    assert lines[0].startswith("route_id,vehicle_id")
    assert len(lines) == 3
