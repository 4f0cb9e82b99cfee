"""
Snapshot Export
===============

JSON snapshot of one dimensioning: network type, parameter set, result set,
timestamp and project metadata.

OUTPUT SCHEMA:
{
    "network": "GSM|UMTS|LTE|HERTZIEN|OPTIQUE",
    "parameters": {"area": 100.0, "busyHour": 15.0, ...},
    "results": {"network": "gsm", "sites": 38, "capacity_label": "2432 canaux", ...},
    "timestamp": "dd/mm/yyyy HH:MM:SS",
    "metadata": {"projet": "...", "university": "...", "course": "...", "generated": "ISO"}
}
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from pydantic import ValidationError

from ..sizing.models import (
    DEFAULT_ASSUMPTIONS,
    DimensioningResult,
    NetworkType,
    ParameterSet,
    PlanningAssumptions,
    UnknownNetworkError,
    parameters_from_wire,
)
from ..sizing.sizer import dimension

logger = logging.getLogger(__name__)

REQUIRED_KEYS = ("network", "parameters", "results")


class SnapshotError(ValueError):
    """Raised when a snapshot file or payload is malformed."""


class ExportError(RuntimeError):
    """Raised when a snapshot, report or saved project cannot be written."""


def create_metadata(
    projet: str = "Outil de Dimensionnement Télécoms",
    university: str = "UCAD 2024/2025",
    course: str = "Réseaux télécoms et services - Dr FALL",
) -> Dict[str, Any]:
    """
    Create metadata block for export.

    Args:
        projet: Project title
        university: Institution and academic year
        course: Course name

    Returns:
        Metadata dictionary
    """
    return {
        "projet": projet,
        "university": university,
        "course": course,
        "generated": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
    }


def format_timestamp(moment: Optional[datetime] = None) -> str:
    """French locale date-time, e.g. '15/06/2025 14:03:22'."""
    moment = moment or datetime.now()
    return moment.strftime("%d/%m/%Y %H:%M:%S")


def epoch_millis(moment: Optional[datetime] = None) -> int:
    moment = moment or datetime.now()
    return int(moment.timestamp() * 1000)


def build_snapshot(
    network: Union[str, NetworkType],
    params: ParameterSet,
    results: DimensioningResult,
    moment: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Assemble the snapshot dictionary for the active network.

    Args:
        network: Network type of the parameter set
        params: Parameter set used for the computation
        results: Result set computed from `params`
        moment: Snapshot time (now by default)

    Returns:
        JSON-serializable snapshot
    """
    net = NetworkType.parse(network)
    return {
        "network": net.value.upper(),
        "parameters": params.to_wire(),
        "results": results.model_dump(mode="json"),
        "timestamp": format_timestamp(moment),
        "metadata": create_metadata(),
    }


def write_json(payload: Dict[str, Any], path: Union[str, Path]) -> Path:
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    except OSError as e:
        raise ExportError(f"Could not write {path}: {e}") from e
    return path


def export_snapshot(
    snapshot: Dict[str, Any],
    output_dir: Union[str, Path],
    prefix: str = "dimensionnement",
) -> Path:
    """
    Write a snapshot to `<output_dir>/<prefix>_<network>_<epoch ms>.json`.

    Returns:
        Path to exported file
    """
    net = NetworkType.parse(snapshot["network"])
    path = Path(output_dir) / f"{prefix}_{net.value}_{epoch_millis()}.json"
    write_json(snapshot, path)
    logger.info("Snapshot exported to: %s", path)
    return path


def parse_snapshot(data: Any) -> Tuple[NetworkType, ParameterSet, DimensioningResult]:
    """
    Validate a snapshot payload.

    Returns:
        (network, parameter set, embedded result set)
    """
    if not isinstance(data, dict):
        raise SnapshotError("Snapshot must be a JSON object")
    missing = [k for k in REQUIRED_KEYS if k not in data]
    if missing:
        raise SnapshotError(f"Snapshot is missing keys: {', '.join(missing)}")
    try:
        net = NetworkType.parse(data["network"])
        params = parameters_from_wire(net, data["parameters"])
        results = DimensioningResult.model_validate(data["results"])
    except (UnknownNetworkError, ValidationError) as e:
        raise SnapshotError(f"Invalid snapshot: {e}") from e
    if results.network != net:
        raise SnapshotError(
            f"Snapshot network {net.value} does not match results network {results.network.value}"
        )
    return net, params, results


def load_snapshot(path: Union[str, Path]) -> Dict[str, Any]:
    """Read and validate a snapshot file; returns the raw dictionary."""
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Snapshot not found: {path}")
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise SnapshotError(f"Snapshot is not valid JSON: {e}") from e
    parse_snapshot(data)
    return data


def verify_snapshot(
    snapshot: Dict[str, Any],
    assumptions: PlanningAssumptions = DEFAULT_ASSUMPTIONS,
) -> bool:
    """True when recomputing from the embedded parameters reproduces the embedded results."""
    net, params, embedded = parse_snapshot(snapshot)
    recomputed = dimension(net, params, assumptions)
    if recomputed != embedded:
        logger.warning("Snapshot for %s does not reproduce its results", net.value)
        return False
    return True
