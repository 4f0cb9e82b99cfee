import re

import pytest

from teldim.export.snapshot import SnapshotError
from teldim.export.store import ProjectStore, project_key
from teldim.sizing.models import NetworkType


def test_project_key():
    assert project_key("GSM") == "telecom_project_gsm"
    assert project_key(NetworkType.MICROWAVE) == "telecom_project_hertzien"


def test_save_and_load(tmp_path, gsm_snapshot):
    store = ProjectStore(tmp_path / "projects")
    project = store.save(gsm_snapshot)
    assert project["name"] == "Projet GSM"
    assert "saved" in project
    assert "timestamp" not in project

    loaded = store.load("gsm")
    assert loaded["parameters"] == gsm_snapshot["parameters"]
    assert loaded["results"] == gsm_snapshot["results"]
    assert store.keys() == ["telecom_project_gsm"]


def test_save_overwrites_per_network(tmp_path, gsm_snapshot, microwave_snapshot):
    store = ProjectStore(tmp_path)
    store.save(gsm_snapshot)
    gsm_snapshot["parameters"]["area"] = 50.0
    gsm_snapshot["results"]["sites"] = 4
    store.save(gsm_snapshot)
    store.save(microwave_snapshot)

    assert store.keys() == ["telecom_project_gsm", "telecom_project_hertzien"]
    assert store.load("gsm")["parameters"]["area"] == 50.0


def test_save_writes_backup(tmp_path, microwave_snapshot):
    store = ProjectStore(tmp_path / "store")
    store.save(microwave_snapshot, backup_dir=tmp_path / "downloads")
    backups = list((tmp_path / "downloads").iterdir())
    assert len(backups) == 1
    assert re.fullmatch(r"projet_hertzien_\d+\.json", backups[0].name)


def test_load_missing_returns_none(tmp_path):
    store = ProjectStore(tmp_path / "empty")
    assert store.load("lte") is None
    assert store.keys() == []


def test_delete(tmp_path, gsm_snapshot):
    store = ProjectStore(tmp_path)
    store.save(gsm_snapshot)
    assert store.delete("gsm")
    assert not store.delete("gsm")
    assert store.load("gsm") is None


def test_load_rejects_corrupted_project(tmp_path):
    store = ProjectStore(tmp_path)
    (tmp_path / "telecom_project_umts.json").write_bytes(b"\xff\xfe\x00{")
    with pytest.raises(SnapshotError):
        store.load("umts")
