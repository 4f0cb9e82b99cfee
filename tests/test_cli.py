import pytest

from teldim.export.snapshot import load_snapshot, verify_snapshot
from teldim.sizing.cli import main


def test_default_run_prints_gsm_summary(capsys):
    assert main([]) == 0
    out = capsys.readouterr().out
    assert "Réseau: GSM" in out
    assert "Sites nécessaires: 38" in out
    assert "2432 canaux" in out
    assert "3 420 000 000 FCFA" in out


def test_set_overrides_and_output(tmp_path, capsys):
    out_path = tmp_path / "snap.json"
    rc = main(["-n", "optique", "--set", "distance=200", "-s", "power=0", "-o", str(out_path)])
    assert rc == 0
    assert "43 dB pertes" in capsys.readouterr().out

    data = load_snapshot(out_path)
    assert data["network"] == "OPTIQUE"
    assert data["parameters"]["distance"] == 200
    assert verify_snapshot(data)


def test_input_snapshot_with_override(tmp_path, capsys):
    snap = tmp_path / "snap.json"
    assert main(["-n", "lte", "-o", str(snap)]) == 0
    capsys.readouterr()

    assert main(["-i", str(snap), "--set", "area=700"]) == 0
    out = capsys.readouterr().out
    assert "Réseau: LTE" in out
    assert "Sites nécessaires: 100" in out


def test_non_numeric_value_is_zero(capsys):
    assert main(["-n", "gsm", "--set", "area=abc"]) == 0
    assert "Sites nécessaires: 0" in capsys.readouterr().out


def test_report_and_save(tmp_path, capsys):
    rc = main([
        "-n", "hertzien",
        "--report", "html", "--report-dir", str(tmp_path / "reports"),
        "--save", "--store-dir", str(tmp_path / "store"),
    ])
    assert rc == 0
    assert len(list((tmp_path / "reports").glob("rapport_HERTZIEN_*.html"))) == 1
    assert (tmp_path / "store" / "telecom_project_hertzien.json").exists()
    assert "Disponibilité: 99.9%" in capsys.readouterr().out


def test_assumptions_file(tmp_path, capsys):
    a = tmp_path / "assumptions.json"
    a.write_text('{"costs": {"lte_site": 1000}}', encoding="utf-8")
    assert main(["-n", "lte", "--assumptions", str(a)]) == 0
    assert "Coût estimé: 15 000 FCFA" in capsys.readouterr().out


@pytest.mark.parametrize(
    "argv",
    [
        ["-n", "wimax"],
        ["-i", "does-not-exist.json"],
        ["-n", "gsm", "--set", "bandwidth=5"],
        ["--assumptions", "missing.json"],
    ],
)
def test_input_errors_exit_2(argv, capsys):
    assert main(argv) == 2
    assert "error" in capsys.readouterr().err.lower()


def test_invalid_assumptions_exit_2(tmp_path, capsys):
    a = tmp_path / "assumptions.json"
    a.write_text('{"cellular": {"lte_site_area_km2": -1}}', encoding="utf-8")
    assert main(["--assumptions", str(a)]) == 2
    assert "validation" in capsys.readouterr().err.lower()


def test_malformed_set_argument():
    with pytest.raises(SystemExit) as exc:
        main(["--set", "area"])
    assert exc.value.code == 2


def test_non_utf8_input_exits_2(tmp_path, capsys):
    path = tmp_path / "snap.json"
    path.write_bytes(b"\xff\xfe\x00{")
    assert main(["-i", str(path)]) == 2
    assert "error" in capsys.readouterr().err.lower()

    assert main(["--assumptions", str(path)]) == 2
