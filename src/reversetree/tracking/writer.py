"""Persistence of reverse tree records next to cached artifacts.

Storage layout:
    <artifact dir>/
    ├── lib-2.0.jar
    └── .tracking/
        ├── com.x_app_1.0        # one file per request root
        └── ...

Each file is rewritten in full on every write; the last writer wins.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from reversetree.foundation.errors import ErrorCode, ReverseTreeError, io_error
from reversetree.resolution.models import Artifact, Dependency

logger = logging.getLogger(__name__)

TRACKING_DIR = ".tracking"
ENCODING = "utf-8"


def tracking_file_name(root: Artifact | Dependency | str) -> str:
    """File name for a request root: its coordinates with ``:`` as ``_``."""
    return str(root).replace(":", "_")


@dataclass(frozen=True, slots=True)
class WriteResult:
    """Outcome of a single persist call."""

    path: Path
    error: ReverseTreeError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ProvenanceWriter:
    """Writes reverse tree lines into ``.tracking`` beside an artifact file."""

    def tracking_path(self, artifact_file: Path, root: Artifact | Dependency | str) -> Path:
        return artifact_file.parent / TRACKING_DIR / tracking_file_name(root)

    def persist(
        self,
        artifact_file: Path,
        root: Artifact | Dependency | str,
        lines: list[str],
    ) -> WriteResult:
        """Create the tracking directory if needed and overwrite the root's file.

        Filesystem failures are returned in the result, not raised.
        """
        target = self.tracking_path(artifact_file, root)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.debug("Cannot create %s: %s", target.parent, e)
            return WriteResult(target, io_error(ErrorCode.TRACKING_DIR_FAILED, target.parent, e))

        try:
            target.write_text("".join(f"{line}\n" for line in lines), encoding=ENCODING)
        except OSError as e:
            logger.debug("Cannot write %s: %s", target, e)
            return WriteResult(target, io_error(ErrorCode.TRACKING_WRITE_FAILED, target, e))

        return WriteResult(target)
