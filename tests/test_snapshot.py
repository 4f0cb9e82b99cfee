import json
import re

import pytest

from teldim.export.snapshot import (
    SnapshotError,
    build_snapshot,
    export_snapshot,
    load_snapshot,
    parse_snapshot,
    verify_snapshot,
)
from teldim.sizing.models import NetworkType, default_parameters, parameters_from_wire
from teldim.sizing.sizer import dimension


def test_snapshot_layout(gsm_snapshot):
    assert gsm_snapshot["network"] == "GSM"
    assert gsm_snapshot["parameters"]["busyHour"] == 15
    assert "busy_hour" not in gsm_snapshot["parameters"]
    assert gsm_snapshot["results"]["sites"] == 38
    assert gsm_snapshot["results"]["capacity_label"] == "2432 canaux"
    assert re.fullmatch(r"\d{2}/\d{2}/\d{4} \d{2}:\d{2}:\d{2}", gsm_snapshot["timestamp"])
    assert gsm_snapshot["metadata"]["university"] == "UCAD 2024/2025"


def test_export_and_reload_reproduces_results(tmp_path, microwave_snapshot):
    path = export_snapshot(microwave_snapshot, tmp_path)
    assert re.fullmatch(r"dimensionnement_hertzien_\d+\.json", path.name)

    data = load_snapshot(path)
    net, params, embedded = parse_snapshot(data)
    assert net is NetworkType.MICROWAVE
    assert dimension(net, params) == embedded
    assert verify_snapshot(data)


@pytest.mark.parametrize("network", list(NetworkType))
def test_round_trip_for_every_network(tmp_path, network):
    params = default_parameters(network)
    snapshot = build_snapshot(network, params, dimension(network, params))
    data = load_snapshot(export_snapshot(snapshot, tmp_path))
    assert verify_snapshot(data)


def test_verify_detects_tampered_results(gsm_snapshot):
    tampered = json.loads(json.dumps(gsm_snapshot))
    tampered["results"]["sites"] = 1
    assert not verify_snapshot(tampered)


def test_parse_rejects_missing_keys(gsm_snapshot):
    del gsm_snapshot["parameters"]
    with pytest.raises(SnapshotError, match="parameters"):
        parse_snapshot(gsm_snapshot)


def test_parse_rejects_unknown_network(gsm_snapshot):
    gsm_snapshot["network"] = "WIMAX"
    with pytest.raises(SnapshotError):
        parse_snapshot(gsm_snapshot)


def test_parse_rejects_mismatched_network(gsm_snapshot):
    gsm_snapshot["network"] = "LTE"
    with pytest.raises(SnapshotError, match="does not match"):
        parse_snapshot(gsm_snapshot)


def test_parse_rejects_non_object():
    with pytest.raises(SnapshotError):
        parse_snapshot([1, 2, 3])


def test_load_rejects_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(SnapshotError):
        load_snapshot(path)


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_snapshot(tmp_path / "nope.json")


def test_load_rejects_non_utf8_file(tmp_path):
    path = tmp_path / "binary.json"
    path.write_bytes(b"\xff\xfe\x00{")
    with pytest.raises(SnapshotError):
        load_snapshot(path)


@pytest.mark.parametrize(
    "network,params",
    [
        ("gsm", {"radius": 1e-160}),
        ("gsm", {"area": 1e200, "density": 1e200}),
        ("gsm", {"area": 1e200, "density": 1e200, "penetration": 0}),
        ("lte", {"area": 1e308, "bandwidth": 1e200, "efficiency": 1e200}),
        ("optique", {"distance": 1e200, "attenuation": 1e200}),
    ],
)
def test_extreme_inputs_round_trip(tmp_path, network, params):
    net = NetworkType.parse(network)
    results = dimension(net, params)
    snapshot = build_snapshot(net, parameters_from_wire(net, params), results)
    data = load_snapshot(export_snapshot(snapshot, tmp_path))
    assert verify_snapshot(data)
