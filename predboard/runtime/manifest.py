"""Run manifest written next to every evaluation's outputs."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Optional
import uuid


@dataclass
class RunManifest:
    run_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    dataset_id: Optional[str] = None
    dataset_label: Optional[str] = None
    config_hash: Optional[str] = None
    summary: Dict[str, float] = field(default_factory=dict)
    outputs: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "run_id": self.run_id,
            "started_at": self.started_at.isoformat(),
            "dataset_id": self.dataset_id,
            "dataset_label": self.dataset_label,
            "config_hash": self.config_hash,
            "summary": dict(self.summary),
            "outputs": dict(self.outputs),
        }
