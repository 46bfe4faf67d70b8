"""Last-action store: one RectangleAction per window, kept as JSON files."""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Hashable
from pathlib import Path

from .models import RectangleAction
from .utils import last_actions_dir, read_json, write_json

log = logging.getLogger(__name__)


class LastActionStore:
    """Single-slot-per-window storage for the record a calculation returns."""

    def __init__(self, directory: Path | None = None) -> None:
        self._dir = directory or last_actions_dir()

    def _path_for(self, window_id: Hashable) -> Path:
        key = str(window_id)
        safe = key.replace("/", "_").replace("\\", "_")
        # Sanitizing can map distinct ids to one name; the digest keeps them apart
        digest = hashlib.md5(key.encode()).hexdigest()[:8]
        return self._dir / f"{safe}-{digest}.json"

    def save(self, window_id: Hashable, action: RectangleAction) -> Path:
        """Replace the record for a window. Returns the file path."""
        path = self._path_for(window_id)
        data = action.to_dict()
        data["window"] = str(window_id)
        write_json(path, data)
        return path

    def load(self, window_id: Hashable) -> RectangleAction | None:
        """Load the record for a window, or None if absent or unreadable."""
        path = self._path_for(window_id)
        data = read_json(path)
        if not isinstance(data, dict):
            return None
        if data.get("window") != str(window_id):
            log.warning("Ignoring last action %s recorded for window %r", path, data.get("window"))
            return None
        try:
            return RectangleAction.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            log.warning("Discarding malformed last action %s: %s", path, e)
            return None

    def clear(self, window_id: Hashable) -> bool:
        """Forget a window. Returns True if a record existed."""
        path = self._path_for(window_id)
        if path.exists():
            path.unlink()
            return True
        return False

    def list_windows(self) -> list[str]:
        """Return sorted list of window ids with a stored record."""
        ids = []
        for p in sorted(self._dir.glob("*.json")):
            data = read_json(p)
            if data and isinstance(data, dict):
                ids.append(data.get("window", p.stem))
        return sorted(ids)
