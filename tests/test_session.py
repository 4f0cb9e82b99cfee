import math

import pytest

from teldim.session import DimensioningSession
from teldim.sizing.models import NetworkType, OpticalParameters
from teldim.sizing.sizer import MAX_SITES, dimension


def test_session_starts_with_defaults():
    session = DimensioningSession()
    assert session.network is NetworkType.GSM
    assert session.results.sites == 38
    assert session.results == dimension("gsm", session.active_parameters)
    assert set(session.parameters) == set(NetworkType)


def test_update_parameter_recomputes_immediately():
    session = DimensioningSession()
    r = session.update_parameter("busyHour", "30")
    assert session.active_parameters.busy_hour == 30
    assert r.sites == 75
    assert session.results is r


def test_non_numeric_input_defaults_to_zero():
    session = DimensioningSession()
    session.update_parameter("area", "abc")
    assert session.active_parameters.area == 0
    assert session.results.sites == 0
    assert session.results.coverage == 0


def test_unknown_parameter_raises_key_error():
    session = DimensioningSession()
    with pytest.raises(KeyError):
        session.update_parameter("bandwidth", 10)


def test_observers_are_notified_on_every_recompute():
    session = DimensioningSession()
    seen = []
    unsubscribe = session.subscribe(seen.append)

    session.update_parameter("radius", 3)
    session.select("lte")
    assert [r.network for r in seen] == [NetworkType.GSM, NetworkType.LTE]

    unsubscribe()
    session.update_parameter("area", 200)
    assert len(seen) == 2


def test_select_keeps_parameters_per_network():
    session = DimensioningSession()
    session.update_parameter("area", 50)

    r = session.select("optique")
    assert r.network is NetworkType.OPTICAL
    assert r.capacity_label == "11 dB pertes"

    r = session.select(NetworkType.GSM)
    assert session.active_parameters.area == 50
    assert r == dimension("gsm", {"area": 50})


def test_replace_parameters_only_recomputes_active_network():
    session = DimensioningSession()
    before = session.results

    assert session.replace_parameters("optique", {"distance": 200, "power": 0}) is None
    assert session.results == before
    assert session.parameters[NetworkType.OPTICAL].distance == 200

    r = session.replace_parameters("gsm", {"area": 100, "radius": 2, "density": 0})
    assert r.sites == 8


def test_replace_parameters_accepts_model():
    session = DimensioningSession("optique")
    r = session.replace_parameters("optique", OpticalParameters(distance=200, power=0))
    assert r.coverage == 50


def test_reset_restores_defaults():
    session = DimensioningSession("umts")
    session.update_parameter("radius", 10)
    r = session.reset()
    assert session.active_parameters.radius == 1.5
    assert r.sites == 15


def test_huge_form_values_keep_results_finite():
    session = DimensioningSession()
    session.update_parameter("area", "1e200")
    r = session.update_parameter("density", "1e200")
    assert r.sites == MAX_SITES
    assert 0 <= r.coverage <= 100
    assert math.isfinite(r.cost)
    assert math.isfinite(r.metric_value)
