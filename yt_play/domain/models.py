from dataclasses import dataclass
from pathlib import Path
from typing import Any, Tuple


@dataclass(frozen=True)
class PlaylistEntry:
    """One remote media item. Only the id is used to match cached files."""
    id: str
    title: str


@dataclass(frozen=True)
class Playlist:
    """A playlist as reported by the downloader."""
    title: str
    entries: Tuple[PlaylistEntry, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> "Playlist":
        """
        Builds a Playlist from the downloader's JSON document.

        Raises:
            ValueError: If the document is not shaped like
                {"title": str, "entries": [{"id": str, "title": str}, ...]}.
        """
        if not isinstance(data, dict):
            raise ValueError("expected a JSON object")
        title = data.get("title")
        if not isinstance(title, str):
            raise ValueError("missing or invalid field 'title'")
        raw_entries = data.get("entries")
        if not isinstance(raw_entries, list):
            raise ValueError("missing or invalid field 'entries'")

        entries = []
        for index, raw in enumerate(raw_entries):
            if not isinstance(raw, dict):
                raise ValueError(f"entry {index} is not an object")
            entry_id, entry_title = raw.get("id"), raw.get("title")
            if not isinstance(entry_id, str) or not isinstance(entry_title, str):
                raise ValueError(f"entry {index} needs string 'id' and 'title'")
            entries.append(PlaylistEntry(id=entry_id, title=entry_title))
        return cls(title=title, entries=tuple(entries))


@dataclass(frozen=True)
class ReconcileReport:
    """Outcome of one reconciliation pass."""
    deleted: Tuple[Path, ...] = ()
    kept: Tuple[Path, ...] = ()
    missing: Tuple[PlaylistEntry, ...] = ()

    @property
    def up_to_date(self) -> bool:
        return not self.deleted and not self.missing
