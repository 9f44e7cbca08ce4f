"""Persisted record of when each source asset was last processed."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from datetime import datetime, timedelta, timezone
from pathlib import Path

UTC = getattr(datetime, "UTC", timezone.utc)  # noqa: UP017

logger = logging.getLogger(__name__)

FIELD_DELIMITER = ";"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%SZ"
# Undecodable file name bytes round-trip through the ledger unchanged.
LEDGER_ERRORS = "surrogateescape"
# Persisted timestamps are whole seconds while live mtimes are not.
STALENESS_GRACE = timedelta(seconds=1)


def ledger_file_name(platform: str, configuration: str) -> str:
    """Return the ledger file name for a platform/configuration pair."""
    return f"AssetLastProcessedTimes_{platform}_{configuration}.txt"


def to_utc(moment: datetime) -> datetime:
    """Normalize a datetime to UTC; naive values are taken as UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


def modified_time_utc(path: Path) -> datetime:
    """Return the file's modification time as an aware UTC datetime."""
    return datetime.fromtimestamp(path.stat().st_mtime, tz=UTC)


def format_timestamp(moment: datetime) -> str:
    """Format a timestamp for the ledger file."""
    return to_utc(moment).strftime(TIMESTAMP_FORMAT)


def parse_timestamp(raw: str) -> datetime:
    """Parse a ledger timestamp into an aware UTC datetime.

    Raises
    ------
    ValueError
        If ``raw`` does not match the ledger timestamp format.
    """
    return datetime.strptime(raw.strip(), TIMESTAMP_FORMAT).replace(tzinfo=UTC)


class BuildLedger:
    """Mapping of absolute source path to last processed modification time.

    Concurrent runs against the same ledger file are not supported: the file
    is read once when loaded and overwritten once when saved, without locking.
    """

    def __init__(self, path: Path, entries: dict[str, datetime] | None = None) -> None:
        self.path = path
        self._entries: dict[str, datetime] = {}
        for key, moment in (entries or {}).items():
            self.mark_processed(key, moment)

    @classmethod
    def load(cls, path: Path) -> BuildLedger:
        """Load a ledger file, skipping malformed lines.

        Parameters
        ----------
        path : Path
            Ledger file location.

        Returns
        -------
        BuildLedger
            Ledger with every well-formed record; empty when the file is absent.
        """
        ledger = cls(path)
        if not path.exists():
            logger.warning("No asset last processed times found (checked for %s).", path)
            return ledger

        text = path.read_text(encoding="utf-8", errors=LEDGER_ERRORS)
        for line_number, line in enumerate(text.splitlines(), 1):
            if not line.strip():
                continue
            parts = line.strip().split(FIELD_DELIMITER)
            if len(parts) != 2:
                logger.warning(
                    "Invalid last processed time line %d in %s: %s", line_number, path, line.strip()
                )
                continue
            try:
                moment = parse_timestamp(parts[1])
            except ValueError:
                logger.warning(
                    "Invalid timestamp on line %d in %s: %s", line_number, path, parts[1].strip()
                )
                continue
            ledger.mark_processed(parts[0], moment)

        logger.info("Loaded %d asset last processed times.", len(ledger))
        return ledger

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, source_path: object) -> bool:
        return str(source_path) in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def get(self, source_path: str | Path) -> datetime | None:
        """Return the recorded time for ``source_path`` if any."""
        return self._entries.get(str(source_path))

    def items(self) -> list[tuple[str, datetime]]:
        """Return all ``(path, timestamp)`` records in insertion order."""
        return list(self._entries.items())

    def is_stale(self, source_path: str | Path, modified_at: datetime) -> bool:
        """Check whether a file must be processed again.

        Parameters
        ----------
        source_path : str | Path
            Absolute source path, matched exactly.
        modified_at : datetime
            Current modification time of the file.

        Returns
        -------
        bool
            ``True`` when there is no record, or the file changed more than
            one second after the recorded time.
        """
        recorded = self._entries.get(str(source_path))
        if recorded is None:
            return True
        return recorded + STALENESS_GRACE < to_utc(modified_at)

    def mark_processed(self, source_path: str | Path, modified_at: datetime) -> None:
        """Insert or overwrite the record for ``source_path``."""
        self._entries[str(source_path)] = to_utc(modified_at).replace(microsecond=0)

    def clear(self) -> None:
        """Drop every record."""
        self._entries.clear()

    def save(self, path: Path | None = None) -> Path:
        """Write every record, replacing the previous file contents.

        Parameters
        ----------
        path : Path | None, optional
            Destination; defaults to the path the ledger was loaded from.

        Returns
        -------
        Path
            Written ledger file.
        """
        target = path or self.path
        target.parent.mkdir(parents=True, exist_ok=True)
        lines: list[str] = []
        for source, moment in self._entries.items():
            if FIELD_DELIMITER in source:
                logger.warning(
                    "Not recording %s: path contains the ledger delimiter '%s'.",
                    source,
                    FIELD_DELIMITER,
                )
                continue
            lines.append(f"{source}{FIELD_DELIMITER}{format_timestamp(moment)}\n")
        target.write_text("".join(lines), encoding="utf-8", errors=LEDGER_ERRORS)
        logger.info("Saved %d asset last processed times to %s.", len(lines), target)
        return target
