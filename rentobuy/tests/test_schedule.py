import numpy as np
import pytest

from rentobuy.core.inputs import BuyVsRentInputs
from rentobuy.core.schedule import RateSchedule


def test_last_value_persists():
    schedule = RateSchedule.coerce([10, 5, 3])
    assert [schedule.rate_for_year(y) for y in (-1, 0, 1, 2, 25)] == [10, 10, 5, 3, 3]


@pytest.mark.parametrize("value", [np.int64(4), np.float64(4.0), 4, 4.0])
def test_scalars_coerce_to_single_value(value):
    assert RateSchedule.coerce(value) == RateSchedule((4.0,))


def test_numpy_array_coerces_to_values():
    assert RateSchedule.coerce(np.array([10, 5])).values == (10.0, 5.0)


def test_inputs_accept_numpy_scalar_rate():
    inputs = BuyVsRentInputs(appreciation_rate=np.int64(2), tax_free_limits=np.int64(250_000))
    assert inputs.appreciation_rate.values == (2.0,)
    assert inputs.tax_free_limits.rate_for_year(10) == 250_000
