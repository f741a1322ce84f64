import pytest

from airku_planner.exceptions import InvalidArgumentError
from airku_planner.services.capacity import calculate_vehicle_load, get_vehicle_capacity_info


def test_single_product_at_vehicle_limit():
    result = calculate_vehicle_load([{"product_type": "240ml", "quantity": 200}], "L300")

    assert result.is_homogeneous is True
    assert result.can_fit is True
    assert result.total_load_equivalent == 200
    assert result.utilization_percentage == 100
    assert result.products[0].approved_quantity == 200


def test_single_product_over_limit_is_capped():
    result = calculate_vehicle_load([{"product_type": "120ml", "quantity": 400}], "L300")

    line = result.products[0]
    assert result.can_fit is False
    assert line.approved_quantity == 350
    assert line.is_reduced is True
    assert result.total_load_equivalent == pytest.approx(199.85, abs=0.01)
    assert "350" in result.message


def test_mixed_load_that_fits():
    result = calculate_vehicle_load(
        [{"product_type": "240ml", "quantity": 100}, {"product_type": "600ml", "quantity": 50}],
        "L300",
    )

    assert result.is_homogeneous is False
    assert result.can_fit is True
    assert result.total_load_equivalent == 180
    assert all(not line.is_reduced for line in result.products)


def test_mixed_load_over_capacity_is_reduced_proportionally():
    result = calculate_vehicle_load(
        [{"product_type": "240ml", "quantity": 150}, {"product_type": "600ml", "quantity": 50}],
        "L300",
    )

    approved = {line.product_type: line.approved_quantity for line in result.products}
    assert result.can_fit is False
    assert approved == {"240ml": 130, "600ml": 43}
    assert result.total_load_equivalent == pytest.approx(198.8)
    assert result.total_load_equivalent <= result.max_capacity


def test_cherry_box_mixed_with_gallons():
    result = calculate_vehicle_load(
        [{"product_type": "240ml", "quantity": 100}, {"product_type": "19L", "quantity": 20}],
        "Cherry Box",
    )

    assert result.can_fit is True
    assert result.total_load_equivalent == pytest.approx(166.6)
    assert result.max_capacity == 170


def test_vehicle_info_lookup():
    profile = get_vehicle_capacity_info("L300")

    assert profile.max_capacity_equivalent == 200
    assert profile.homogeneous_capacity["19L"] == 60


def test_unknown_vehicle_and_product_types_are_rejected():
    with pytest.raises(InvalidArgumentError):
        get_vehicle_capacity_info("Truck")
    with pytest.raises(InvalidArgumentError):
        calculate_vehicle_load([{"product_type": "5L", "quantity": 1}], "L300")
    with pytest.raises(InvalidArgumentError):
        calculate_vehicle_load([], "L300")
