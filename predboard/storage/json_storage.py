"""JSON-based storage for exported datasets and evaluation reports."""

from pathlib import Path
from typing import Any, Optional
import json


class JsonStorage:
    def __init__(self, base_dir: str) -> None:
        self._base_dir = Path(base_dir)
        self._base_dir.mkdir(parents=True, exist_ok=True)

    def path_for(self, name: str) -> Path:
        return self._base_dir / f"{name}.json"

    def write_document(self, name: str, payload: Any) -> str:
        path = self.path_for(name)
        path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
        return str(path)

    def read_document(self, name: str) -> Optional[Any]:
        path = self.path_for(name)
        if not path.exists():
            return None
        return json.loads(path.read_text(encoding="utf-8"))
