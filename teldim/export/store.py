"""
Local project store.

A minimal key-value store on disk: one JSON document per key, where the key
is `telecom_project_<network>`. Saving a network overwrites its previous
project.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..sizing.models import NetworkType
from .snapshot import ExportError, SnapshotError, epoch_millis, format_timestamp, parse_snapshot, write_json

logger = logging.getLogger(__name__)

KEY_PREFIX = "telecom_project_"


def project_key(network: Union[str, NetworkType]) -> str:
    return KEY_PREFIX + NetworkType.parse(network).value


class ProjectStore:
    """Snapshots saved per network type under `directory`."""

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def save(self, snapshot: Dict[str, Any], backup_dir: Union[str, Path, None] = None) -> Dict[str, Any]:
        """
        Save a snapshot as the project of its network.

        Args:
            snapshot: Snapshot produced by `build_snapshot`
            backup_dir: If given, also write `projet_<network>_<epoch ms>.json` there

        Returns:
            The stored project document
        """
        net, _, _ = parse_snapshot(snapshot)
        project = {"name": f"Projet {net.value.upper()}", **snapshot, "saved": format_timestamp()}
        project.pop("timestamp", None)

        path = write_json(project, self._path(project_key(net)))
        logger.info("Project %s saved to: %s", net.value, path)

        if backup_dir is not None:
            backup = Path(backup_dir) / f"projet_{net.value}_{epoch_millis()}.json"
            write_json(project, backup)
            logger.info("Backup written to: %s", backup)
        return project

    def load(self, network: Union[str, NetworkType]) -> Optional[Dict[str, Any]]:
        """Return the saved project for `network`, or None if nothing was saved."""
        path = self._path(project_key(network))
        if not path.exists():
            return None
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise SnapshotError(f"Saved project {path.name} is corrupted: {e}") from e
        parse_snapshot(data)
        return data

    def keys(self) -> List[str]:
        if not self.directory.exists():
            return []
        return sorted(p.stem for p in self.directory.glob(f"{KEY_PREFIX}*.json"))

    def delete(self, network: Union[str, NetworkType]) -> bool:
        path = self._path(project_key(network))
        if not path.exists():
            return False
        try:
            path.unlink()
        except OSError as e:
            raise ExportError(f"Could not delete {path}: {e}") from e
        logger.info("Project %s deleted", NetworkType.parse(network).value)
        return True
