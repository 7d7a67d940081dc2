"""
YAML file store for scanner settings and the missing list.

Layout of the file:

    settings:
      sheet_url: https://docs.google.com/spreadsheets/d/<id>/edit
      vision_api_key: ...
      sheet_tab: My Collection
      sheet_column: B
    missing_list:
      - Pikachu
      - Charizard

Writes go to a temp file in the same directory and are swapped in with
os.replace(), so readers see either the old or the new file, never a partial
one. Saves hold a process-wide lock across read-modify-write, so saving one
section never drops a concurrent save of the other. Reads never raise: a
missing or unreadable file yields defaults.
"""
import logging
import os
import pathlib
import tempfile
import threading
from typing import Any, Dict, List

import yaml
from pydantic import ValidationError

from domain.models.scan import ScannerSettings

logger = logging.getLogger(__name__)

SETTINGS_KEY = "settings"
MISSING_LIST_KEY = "missing_list"

# Shared by all instances; the API builds a new store per request.
_STORE_LOCK = threading.Lock()


class YamlScannerStore:
    """
    File-backed implementation of application.ports.ScannerStore.
    """

    def __init__(self, path: "pathlib.Path | str"):
        self._path = pathlib.Path(path)

    @property
    def path(self) -> pathlib.Path:
        return self._path

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    def load_settings(self) -> ScannerSettings:
        raw = self._read().get(SETTINGS_KEY)
        if not isinstance(raw, dict):
            return ScannerSettings()
        try:
            return ScannerSettings(**raw)
        except ValidationError as e:
            logger.warning(f"Failed to load settings from {self._path}: {e}")
            return ScannerSettings()

    def save_settings(self, settings: ScannerSettings) -> None:
        with _STORE_LOCK:
            data = self._read()
            data[SETTINGS_KEY] = settings.model_dump()
            self._write(data)

    # ------------------------------------------------------------------
    # Missing list
    # ------------------------------------------------------------------

    def load_missing_list(self) -> List[str]:
        raw = self._read().get(MISSING_LIST_KEY)
        if not isinstance(raw, list):
            return []
        return [str(name) for name in raw if name is not None]

    def save_missing_list(self, names: List[str]) -> None:
        with _STORE_LOCK:
            data = self._read()
            data[MISSING_LIST_KEY] = list(names)
            self._write(data)

    # ------------------------------------------------------------------
    # File access
    # ------------------------------------------------------------------

    def _read(self) -> Dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            data = yaml.safe_load(self._path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to read scanner store {self._path}: {e}")
            return {}
        if not isinstance(data, dict):
            if data is not None:
                logger.warning(f"Ignoring scanner store {self._path}: not a mapping")
            return {}
        return data

    def _write(self, data: Dict[str, Any]) -> None:
        """
        Atomically write the store.

        Raises:
            OSError: If the directory cannot be created or the write fails
        """
        self._path.parent.mkdir(parents=True, exist_ok=True)

        tmp_path = None
        try:
            with tempfile.NamedTemporaryFile(
                mode="w",
                dir=str(self._path.parent),
                suffix=".yaml",
                delete=False,
                encoding="utf-8",
            ) as tmp_file:
                tmp_path = tmp_file.name
                yaml.safe_dump(
                    data,
                    tmp_file,
                    sort_keys=False,
                    default_flow_style=False,
                    allow_unicode=True,
                )
            os.replace(tmp_path, str(self._path))
        except OSError:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise
