"""Pytest fixtures for reversetree tests."""

from pathlib import Path

import pytest

from reversetree.foundation.config import reset_config
from reversetree.resolution import (
    Artifact,
    CollectStepData,
    Dependency,
    LocalRepository,
    RepositorySession,
    RequestTrace,
)

APP = Artifact("com.x", "app", "1.0")
MID = Artifact("com.x", "mid", "1.0")
LIB = Artifact("com.x", "lib", "2.0")


def dep(artifact: Artifact, scope: str = "compile") -> Dependency:
    return Dependency(artifact, scope)


def collect_trace(
    path: list[Artifact],
    node: Artifact,
    context: str = "compile",
) -> RequestTrace:
    """Trace with a collect step as outermost scope, like the collector opens it."""
    step = CollectStepData(
        context=context,
        path=tuple(dep(a) for a in path),
        node=dep(node),
    )
    return RequestTrace.new_trace(step)


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep REVERSETREE_* from the host environment out of tests."""
    import os

    for key in list(os.environ):
        if key.startswith("REVERSETREE_"):
            monkeypatch.delenv(key)
    reset_config()


@pytest.fixture
def local_repo(tmp_path: Path) -> LocalRepository:
    basedir = tmp_path / "repository"
    basedir.mkdir()
    return LocalRepository(basedir)


@pytest.fixture
def session(local_repo: LocalRepository) -> RepositorySession:
    return RepositorySession(local_repository=local_repo)


@pytest.fixture
def cached(local_repo: LocalRepository):
    """Materialize an artifact in the local repository and return it with its file."""

    def _cached(artifact: Artifact) -> Artifact:
        file = local_repo.path_of(artifact)
        file.parent.mkdir(parents=True, exist_ok=True)
        file.write_bytes(b"")
        return artifact.with_file(file)

    return _cached


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """The CLI reconfigures the root logger; undo it after each test."""
    import logging

    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
