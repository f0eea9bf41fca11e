from __future__ import annotations
import json
from pathlib import Path
from .dispatcher import Observer
from .events import BaseEvent

class JsonFileObserver(Observer):
    """Appends one JSON object per event; `seq` orders events within a run."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._seq = 0

    def notify(self, event: BaseEvent) -> None:
        self._seq += 1
        row = {"seq": self._seq, "type": event.__class__.__name__, **event.dict()}
        with self.path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(row, default=str) + "\n")
