"""
Key/value blob backends kept outside a database.

JSONFileStore keeps every blob inside one JSON object on disk and rewrites the
whole file on each change, the way a browser's localStorage is mirrored.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional
import json


class MemoryStore:
    """Blob backend living only in the current process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)


class JSONFileStore:
    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            print(f"[store] Could not read {self.path}: {exc}")
            return {}
        if not isinstance(data, dict):
            print(f"[store] Ignoring {self.path}: expected a JSON object")
            return {}
        dropped = sorted(str(k) for k, v in data.items() if not isinstance(v, str))
        if dropped:
            print(f"[store] Ignoring non-string entries in {self.path}: {', '.join(dropped)}")
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")

    def get(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)

    def keys(self) -> list[str]:
        return list(self._read())
