"""Tests for the reverse tree listener (end to end through the dispatcher)."""

import logging
import threading
from pathlib import Path

import pytest
from conftest import APP, LIB, MID, collect_trace

from reversetree.foundation.config import ReverseTreeConfig
from reversetree.foundation.errors import ErrorCode, ReverseTreeError
from reversetree.resolution import (
    Artifact,
    ArtifactRequestData,
    DescriptorRequestData,
    EventType,
    OpaqueData,
    RepositoryEvent,
    RepositorySession,
    RequestTrace,
)
from reversetree.tracking import TRACKING_DIR, ReverseTreeRepositoryListener, install_reverse_tree_listener


def _tracking_files(root: Path) -> list[Path]:
    return [p for p in root.rglob("*") if TRACKING_DIR in p.parts]


class TestArtifactResolved:
    """Core recording behaviour."""

    def test_records_chain(self, session: RepositorySession, cached) -> None:
        listener = ReverseTreeRepositoryListener()
        listener.attach(session.dispatcher)

        session.artifact_resolved(cached(LIB), collect_trace([APP, MID], LIB))

        tracking_file = session.local_repository.basedir / "com/x/lib/2.0/.tracking/com.x_app_1.0"
        assert tracking_file.read_text(encoding="utf-8").splitlines() == [
            "com.x:lib:2.0 (compile)",
            "  com.x:mid:1.0 (compile)",
            "    com.x:app:1.0 (compile)",
        ]

    def test_outcome_describes_write(self, session: RepositorySession, cached) -> None:
        event = RepositoryEvent(
            EventType.ARTIFACT_RESOLVED, session, cached(LIB), collect_trace([APP, MID], LIB)
        )

        outcome = ReverseTreeRepositoryListener().artifact_resolved(event)

        assert outcome.status == "recorded"
        assert outcome.path is not None and outcome.path.name == "com.x_app_1.0"
        assert outcome.lines[0] == "com.x:lib:2.0 (compile)"

    def test_pom_resolution_of_node_recorded(self, session: RepositorySession, cached) -> None:
        """Descriptor read for the node itself still counts (extension ignored)."""
        pom = cached(LIB.with_extension("pom"))
        trace = collect_trace([APP, MID], LIB).new_child(DescriptorRequestData(pom))

        outcome = ReverseTreeRepositoryListener().artifact_resolved(
            RepositoryEvent(EventType.ARTIFACT_RESOLVED, session, pom, trace)
        )

        assert outcome.status == "recorded"
        assert outcome.path == pom.file.parent / TRACKING_DIR / "com.x_app_1.0"

    def test_direct_dependency(self, session: RepositorySession, cached) -> None:
        outcome = ReverseTreeRepositoryListener().artifact_resolved(
            RepositoryEvent(EventType.ARTIFACT_RESOLVED, session, cached(MID), collect_trace([APP], MID))
        )
        assert outcome.lines == ("com.x:mid:1.0 (compile)", "  com.x:app:1.0 (compile)")

    def test_last_write_wins(self, session: RepositorySession, cached) -> None:
        """A later chain from the same root replaces the earlier record."""
        other = Artifact("com.x", "other", "1.0")
        listener = ReverseTreeRepositoryListener()
        listener.attach(session.dispatcher)
        lib = cached(LIB)

        session.artifact_resolved(lib, collect_trace([APP, MID], LIB))
        session.artifact_resolved(lib, collect_trace([APP, other], LIB))

        content = (lib.file.parent / TRACKING_DIR / "com.x_app_1.0").read_text(encoding="utf-8")
        assert "com.x:other:1.0" in content
        assert "com.x:mid:1.0" not in content

    def test_different_roots_kept_apart(self, session: RepositorySession, cached) -> None:
        second_root = Artifact("com.y", "service", "3.1")
        listener = ReverseTreeRepositoryListener()
        listener.attach(session.dispatcher)
        lib = cached(LIB)

        session.artifact_resolved(lib, collect_trace([APP, MID], LIB))
        session.artifact_resolved(lib, collect_trace([second_root], LIB))

        names = sorted(p.name for p in (lib.file.parent / TRACKING_DIR).iterdir())
        assert names == ["com.x_app_1.0", "com.y_service_3.1"]


class TestIgnoredEvents:
    """Irrelevant events leave the filesystem untouched."""

    def test_artifact_outside_cache(self, session: RepositorySession, tmp_path: Path) -> None:
        built = LIB.with_file(tmp_path / "workspace" / "lib" / "target" / "lib-2.0.jar")
        built.file.parent.mkdir(parents=True)

        outcome = ReverseTreeRepositoryListener().artifact_resolved(
            RepositoryEvent(EventType.ARTIFACT_RESOLVED, session, built, collect_trace([APP, MID], LIB))
        )

        assert outcome.status == "skipped"
        assert _tracking_files(tmp_path) == []

    def test_no_collect_step(self, session: RepositorySession, cached) -> None:
        trace = RequestTrace.new_trace(OpaqueData("plugin")).new_child(ArtifactRequestData(LIB))

        outcome = ReverseTreeRepositoryListener().artifact_resolved(
            RepositoryEvent(EventType.ARTIFACT_RESOLVED, session, cached(LIB), trace)
        )

        assert outcome.reason == "no collect step"
        assert _tracking_files(session.local_repository.basedir) == []

    def test_no_trace(self, session: RepositorySession, cached) -> None:
        outcome = ReverseTreeRepositoryListener().artifact_resolved(
            RepositoryEvent(EventType.ARTIFACT_RESOLVED, session, cached(LIB))
        )
        assert outcome.status == "skipped"

    @pytest.mark.parametrize(
        "resolved",
        [
            Artifact("com.y", "lib", "2.0"),
            Artifact("com.x", "parent", "2.0", "pom"),
            Artifact("com.x", "lib", "1.9"),
        ],
    )
    def test_other_node(self, session: RepositorySession, cached, resolved: Artifact) -> None:
        outcome = ReverseTreeRepositoryListener().artifact_resolved(
            RepositoryEvent(
                EventType.ARTIFACT_RESOLVED, session, cached(resolved), collect_trace([APP, MID], LIB)
            )
        )
        assert outcome.reason == "different node"
        assert _tracking_files(session.local_repository.basedir) == []

    def test_other_event_types_ignored(self, session: RepositorySession, cached) -> None:
        listener = ReverseTreeRepositoryListener()
        event = RepositoryEvent(
            EventType.ARTIFACT_DOWNLOADED, session, cached(LIB), collect_trace([APP, MID], LIB)
        )

        assert listener(event) is None
        assert _tracking_files(session.local_repository.basedir) == []

    def test_skip_logged_at_debug(self, session: RepositorySession, caplog) -> None:
        caplog.set_level(logging.DEBUG, logger="reversetree")
        ReverseTreeRepositoryListener().artifact_resolved(
            RepositoryEvent(EventType.ARTIFACT_RESOLVED, session, LIB)
        )
        assert "not in local repository" in caplog.text


class TestFailures:
    def test_failure_raised_through_dispatcher(self, session: RepositorySession, cached) -> None:
        lib = cached(LIB)
        (lib.file.parent / TRACKING_DIR).write_text("blocks the directory")
        ReverseTreeRepositoryListener().attach(session.dispatcher)

        with pytest.raises(ReverseTreeError) as excinfo:
            session.artifact_resolved(lib, collect_trace([APP, MID], LIB))

        assert excinfo.value.code is ErrorCode.TRACKING_DIR_FAILED
        assert isinstance(excinfo.value.__cause__, OSError)

    def test_failure_returned_as_outcome(self, session: RepositorySession, cached) -> None:
        lib = cached(LIB)
        (lib.file.parent / TRACKING_DIR / "com.x_app_1.0").mkdir(parents=True)

        outcome = ReverseTreeRepositoryListener().artifact_resolved(
            RepositoryEvent(EventType.ARTIFACT_RESOLVED, session, lib, collect_trace([APP, MID], LIB))
        )

        assert outcome.status == "failed"
        assert outcome.error is not None
        assert outcome.error.code is ErrorCode.TRACKING_WRITE_FAILED
        with pytest.raises(ReverseTreeError):
            outcome.raise_for_error()


class TestRegistration:
    def test_unsubscribe_stops_recording(self, session: RepositorySession, cached) -> None:
        unsubscribe = ReverseTreeRepositoryListener().attach(session.dispatcher)
        unsubscribe()

        session.artifact_resolved(cached(LIB), collect_trace([APP, MID], LIB))

        assert session.dispatcher.listeners == ()
        assert _tracking_files(session.local_repository.basedir) == []

    def test_install_disabled_by_default(self, session: RepositorySession) -> None:
        assert install_reverse_tree_listener(session, ReverseTreeConfig()) is None
        assert session.dispatcher.listeners == ()

    def test_install_when_enabled(self, session: RepositorySession, cached) -> None:
        unsubscribe = install_reverse_tree_listener(
            session, ReverseTreeConfig(record_reverse_tree=True)
        )
        assert unsubscribe is not None

        session.artifact_resolved(cached(LIB), collect_trace([APP, MID], LIB))
        assert (session.local_repository.tracking_dir_of(LIB) / "com.x_app_1.0").is_file()

        unsubscribe()
        assert session.dispatcher.listeners == ()

    def test_install_on_configured_repository(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """A session built from a "~" config path records under the expanded home."""
        monkeypatch.setenv("HOME", str(tmp_path))
        config = ReverseTreeConfig(local_repository="~/repo", record_reverse_tree=True)
        session = RepositorySession.for_basedir(config.local_repository_path())
        assert session.local_repository.basedir == tmp_path / "repo"

        install_reverse_tree_listener(session, config)
        lib_file = session.local_repository.path_of(LIB)
        lib_file.parent.mkdir(parents=True)
        lib_file.write_bytes(b"")
        session.artifact_resolved(LIB.with_file(lib_file), collect_trace([APP, MID], LIB))

        assert (tmp_path / "repo" / "com" / "x" / "lib" / "2.0" / ".tracking" / "com.x_app_1.0").is_file()


class TestConcurrency:
    def test_parallel_resolution(self, session: RepositorySession, cached) -> None:
        """Worker threads resolving many artifacts share one listener instance."""
        ReverseTreeRepositoryListener().attach(session.dispatcher)
        nodes = [cached(Artifact("com.x", f"lib{i}", "1.0")) for i in range(16)]
        errors: list[Exception] = []

        def worker(artifact: Artifact) -> None:
            try:
                for _ in range(5):
                    session.artifact_resolved(artifact, collect_trace([APP, MID], artifact))
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=worker, args=(a,)) for a in nodes]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        for artifact in nodes:
            content = (artifact.file.parent / TRACKING_DIR / "com.x_app_1.0").read_text(encoding="utf-8")
            assert content.splitlines()[0] == f"{artifact} (compile)"
            assert len(content.splitlines()) == 3
