"""JSON-file-backed key-value store.

All keys live in one JSON object on disk (``{"key": "<serialized value>"}``).
The file is read once on construction and rewritten after each change.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Optional

from fitfinder.data_layer.exceptions import StorageError
from fitfinder.storage.key_value_store import KeyValueStore

logger = logging.getLogger(__name__)


class JsonFileStore(KeyValueStore):
    """Store persisted to a single JSON document.

    A missing file starts empty. A file that is not a JSON object is treated
    the same way, so one bad write never locks the user out of the app.
    """

    def __init__(self, path: str) -> None:
        self.path = Path(path)
        self._values: Dict[str, str] = self._read()

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r") as f:
                data = json.load(f)
        except ValueError:
            logger.warning("Store file %s is not valid JSON; starting empty", self.path)
            return {}
        if not isinstance(data, dict):
            logger.warning("Store file %s does not hold an object; starting empty", self.path)
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
            with open(tmp_path, "w") as f:
                json.dump(self._values, f, indent=2)
            tmp_path.replace(self.path)
        except OSError as e:
            raise StorageError(f"Failed to write store file {self.path}: {e}") from e

    def get_raw(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set_raw(self, key: str, value: str) -> None:
        self._values[key] = value
        self._write()

    def delete(self, key: str) -> None:
        if key in self._values:
            del self._values[key]
            self._write()
