"""Artifact and dependency models shared with the resolution engine."""

from dataclasses import dataclass, replace
from pathlib import Path

DEFAULT_EXTENSION = "jar"


@dataclass(frozen=True, slots=True)
class Artifact:
    """A resolvable artifact: coordinates plus the backing file once resolved."""

    group_id: str
    artifact_id: str
    version: str
    extension: str = ""
    classifier: str = ""
    file: Path | None = None

    @classmethod
    def parse(cls, coords: str) -> "Artifact":
        """Parse ``group:artifact:version[:extension[:classifier]]``.

        Raises:
            ValueError: If fewer than three or more than five parts are given.
        """
        parts = coords.strip().split(":")
        if not 3 <= len(parts) <= 5 or not all(parts[:3]):
            raise ValueError(f"Bad artifact coordinates '{coords}', expected g:a:v[:ext[:classifier]]")
        return cls(*parts)

    @property
    def gav(self) -> tuple[str, str, str]:
        return (self.group_id, self.artifact_id, self.version)

    def with_file(self, file: Path | None) -> "Artifact":
        """Return a copy backed by ``file``."""
        return replace(self, file=file)

    def with_extension(self, extension: str) -> "Artifact":
        """Return a copy with a different extension (e.g. ``pom`` during collection)."""
        return replace(self, extension=extension)

    def __str__(self) -> str:
        """``g:a:v[:ext[:classifier]]``; a classifier forces the extension slot."""
        parts = [self.group_id, self.artifact_id, self.version]
        if self.extension or self.classifier:
            parts.append(self.extension or DEFAULT_EXTENSION)
        if self.classifier:
            parts.append(self.classifier)
        return ":".join(parts)


@dataclass(frozen=True, slots=True)
class Dependency:
    """An element of a dependency chain: an artifact and its declared scope."""

    artifact: Artifact
    scope: str = ""

    def __str__(self) -> str:
        return str(self.artifact)


@dataclass(frozen=True, slots=True)
class LocalRepository:
    """The local artifact cache and its default directory layout.

    Layout:
        <basedir>/<group as dirs>/<artifact>/<version>/<artifact>-<version>[-<classifier>].<ext>
    """

    basedir: Path

    def artifact_dir(self, artifact: Artifact) -> Path:
        return (
            self.basedir.joinpath(*artifact.group_id.split("."))
            / artifact.artifact_id
            / artifact.version
        )

    def path_of(self, artifact: Artifact) -> Path:
        """Path where ``artifact`` is materialized in this cache."""
        name = f"{artifact.artifact_id}-{artifact.version}"
        if artifact.classifier:
            name += f"-{artifact.classifier}"
        name += f".{artifact.extension or DEFAULT_EXTENSION}"
        return self.artifact_dir(artifact) / name

    def tracking_dir_of(self, artifact: Artifact) -> Path:
        """Directory holding provenance records for ``artifact``."""
        from reversetree.tracking.writer import TRACKING_DIR

        return self.artifact_dir(artifact) / TRACKING_DIR
