"""Read reverse tree records back from a local repository."""

from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from reversetree.tracking.flattener import INDENT
from reversetree.tracking.writer import ENCODING, TRACKING_DIR


@dataclass(frozen=True, slots=True)
class TrackingRecord:
    """Contents of one ``.tracking`` file."""

    root_key: str
    lines: tuple[str, ...]

    @property
    def depth(self) -> int:
        """Number of ancestors between the artifact and its request root."""
        return max(len(self.lines) - 1, 0)

    def entries(self) -> list[tuple[int, str]]:
        """Lines as ``(level, text)`` pairs with the indentation stripped."""
        result = []
        for line in self.lines:
            stripped = line.lstrip(" ")
            result.append(((len(line) - len(stripped)) // len(INDENT), stripped))
        return result

    def to_dict(self) -> dict:
        return {"root": self.root_key, "lines": list(self.lines)}


def read_tracking(tracking_dir: Path) -> list[TrackingRecord]:
    """Load every record in ``tracking_dir``, sorted by root key."""
    if not tracking_dir.is_dir():
        return []
    records = []
    for path in sorted(tracking_dir.iterdir()):
        if not path.is_file():
            continue
        lines = tuple(path.read_text(encoding=ENCODING).splitlines())
        records.append(TrackingRecord(root_key=path.name, lines=lines))
    return records


def iter_tracked_artifacts(basedir: Path) -> Iterator[Path]:
    """Yield every ``.tracking`` directory under ``basedir`` in sorted order."""
    if not basedir.is_dir():
        return
    for path in sorted(basedir.rglob(TRACKING_DIR)):
        if path.is_dir():
            yield path
