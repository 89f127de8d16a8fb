"""Tests for scheduled Parameters."""

import pytest

from algorithms.shared.parameter import (
    ExponentialDecay,
    LinearDecay,
    Parameter,
    PolynomialDecay,
    as_parameter,
    parameter_from_config,
)


class TestFixedParameter:

    def test_value_never_changes(self):
        p = Parameter(0.3)
        for _ in range(10):
            p = p.step()
        assert p.value() == 0.3
        assert p.count == 10

    def test_step_returns_new_object(self):
        p = Parameter(0.3)
        q = p.step()
        assert p.count == 0
        assert q.count == 1

    def test_arithmetic(self):
        p = Parameter(0.5)
        assert p * 4.0 == 2.0
        assert 4.0 * p == 2.0
        assert float(p) == 0.5
        assert p * Parameter(0.5) == 0.25


class TestSchedules:

    def test_exponential_closed_form(self):
        p = Parameter(1.0, ExponentialDecay(0.5))
        for _ in range(3):
            p = p.step()
        assert p.value() == pytest.approx(0.125)

    def test_exponential_floor(self):
        p = Parameter(1.0, ExponentialDecay(0.1, floor=0.05), count=5)
        assert p.value() == 0.05

    def test_polynomial_closed_form(self):
        p = Parameter(1.0, PolynomialDecay(1.0), count=3)
        assert p.value() == pytest.approx(0.25)

    def test_linear_interpolates_then_holds(self):
        schedule = LinearDecay(end=0.0, steps=4)
        assert Parameter(1.0, schedule, count=2).value() == pytest.approx(0.5)
        assert Parameter(1.0, schedule, count=4).value() == 0.0
        assert Parameter(1.0, schedule, count=40).value() == 0.0

    @pytest.mark.parametrize("bad", [
        lambda: ExponentialDecay(0.0),
        lambda: ExponentialDecay(1.5),
        lambda: PolynomialDecay(-1.0),
        lambda: LinearDecay(0.0, 0),
    ])
    def test_invalid_schedules_rejected(self, bad):
        with pytest.raises(ValueError):
            bad()

    def test_independent_instances(self):
        a = Parameter(1.0, ExponentialDecay(0.5))
        b = a.step().step()
        assert a.value() == 1.0
        assert b.value() == pytest.approx(0.25)


class TestParameterConstruction:

    def test_as_parameter_wraps_numbers(self):
        assert as_parameter(0.2) == Parameter(0.2)
        assert as_parameter(1) == Parameter(1.0)

    def test_as_parameter_passes_through(self):
        p = Parameter(0.2, ExponentialDecay(0.9))
        assert as_parameter(p) is p

    def test_from_config_number(self):
        assert parameter_from_config(0.1) == Parameter(0.1)

    def test_from_config_mapping_without_schedule(self):
        assert parameter_from_config({"value": 0.1}) == Parameter(0.1)

    def test_from_config_with_schedule(self):
        p = parameter_from_config({
            "value": 0.1,
            "schedule": {"type": "exponential", "rate": 0.9, "floor": 0.01},
        })
        assert p == Parameter(0.1, ExponentialDecay(0.9, 0.01))

    def test_from_config_unknown_schedule(self):
        with pytest.raises(ValueError, match="Invalid schedule type"):
            parameter_from_config({"value": 0.1, "schedule": {"type": "cosine"}})

    @pytest.mark.parametrize("raw", [None, "0.1", {"schedule": {}}, True])
    def test_from_config_malformed(self, raw):
        with pytest.raises(ValueError):
            parameter_from_config(raw)
