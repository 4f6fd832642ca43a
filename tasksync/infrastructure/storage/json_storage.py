"""JSON document files with Result-based error handling.

Reads return ``Ok(data)`` or ``Err(message)``; writes go to a sibling
temporary file that is then renamed over the target, so a reader never
sees a half-written document.
"""

import json
import os
from pathlib import Path
from typing import Any

from tasksync.domain.shared.result import Err, Ok, Result


class JsonStorage:
    """Load and save whole JSON documents.

    Example:
        storage = JsonStorage()
        result = storage.load_json(Path("history.json"), default={"groups": []})
        if isinstance(result, Ok):
            groups = result.value["groups"]
    """

    def load_json(self, path: Path, default: Any = None) -> Result[Any, str]:
        """Load a JSON document.

        Args:
            path: Document to read.
            default: Value returned when the file does not exist. With no
                default a missing file is an error.

        Returns:
            Ok(data), or Err(str) describing why the file could not be read.
        """
        if not path.exists():
            if default is not None:
                return Ok(default)
            return Err(f"File not found: {path}")

        try:
            return Ok(json.loads(path.read_text(encoding="utf-8")))
        except json.JSONDecodeError as e:
            return Err(f"Invalid JSON in {path}: {e}")
        except OSError as e:
            return Err(f"Error reading {path}: {e}")

    def save_json(self, path: Path, data: Any) -> Result[None, str]:
        """Replace a JSON document, creating parent directories.

        Returns:
            Ok(None), or Err(str) if the data cannot be serialized or written.
        """
        try:
            content = json.dumps(data, indent=2)
        except (TypeError, ValueError) as e:
            return Err(f"Data not JSON serializable: {e}")

        tmp_path = path.with_name(f".{path.name}.tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(content, encoding="utf-8")
            os.replace(tmp_path, path)
        except OSError as e:
            return Err(f"Error writing {path}: {e}")
        return Ok(None)
