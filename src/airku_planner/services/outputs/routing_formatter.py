"""Serializers for routing outputs."""

from __future__ import annotations

import csv
import io
from dataclasses import asdict

from ..routing.models import RoutingResult


def routing_result_to_json(result: RoutingResult) -> dict:
    return {
        "metadata": result.metadata,
        "plans": [
            {
                "route_id": plan.route_id,
                "vehicle_id": plan.vehicle_id,
                "driver_id": plan.driver_id,
                "date": plan.date,
                "total_load": plan.total_load,
                "total_distance_km": plan.total_distance_km,
                "store_ids": plan.store_ids,
                "stops": [asdict(stop) for stop in plan.stops],
            }
            for plan in result.plans
        ],
        "unrouted_order_ids": [order.order_id for order in result.unrouted_orders],
    }


def routing_result_to_csv(result: RoutingResult) -> str:
    buffer = io.StringIO()
    fieldnames = [
        "route_id",
        "vehicle_id",
        "driver_id",
        "date",
        "sequence",
        "order_id",
        "store_id",
        "store_name",
        "latitude",
        "longitude",
        "distance_from_prev_km",
        "total_load",
        "total_distance_km",
    ]
    writer = csv.DictWriter(buffer, fieldnames=fieldnames)
    writer.writeheader()
    for plan in result.plans:
        for stop in plan.stops:
            writer.writerow(
                {
                    "route_id": plan.route_id,
                    "vehicle_id": plan.vehicle_id,
                    "driver_id": plan.driver_id,
                    "date": plan.date,
                    "sequence": stop.sequence,
                    "order_id": stop.order_id,
                    "store_id": stop.store_id,
                    "store_name": stop.store_name,
                    "latitude": stop.location.latitude,
                    "longitude": stop.location.longitude,
                    "distance_from_prev_km": stop.distance_from_prev_km,
                    "total_load": plan.total_load,
                    "total_distance_km": plan.total_distance_km,
                }
            )
    return buffer.getvalue()
