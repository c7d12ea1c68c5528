"""Shared test fixtures."""

from __future__ import annotations

import json
import shlex
from pathlib import Path

import pytest

from crux_release.errors import ExternalCommandError
from crux_release.shell import Shell


class RecordingShell(Shell):
    """Shell that records commands instead of running them.

    `cargo metadata` returns `metadata`; any command starting with one of
    `failures` raises ExternalCommandError with exit status 101, unless the
    command is run with check=False.
    """

    def __init__(
        self, cwd: Path, metadata: str = "{}", failures: tuple[str, ...] = ()
    ) -> None:
        super().__init__(cwd, echo=False)
        self.metadata = metadata
        self.failures = failures
        self.calls: list[tuple[str, Path]] = []

    def _execute(
        self, args: tuple[str, ...], *, capture: bool, check: bool
    ) -> str:
        command = shlex.join(args)
        self.calls.append((command, self.cwd))
        if check and any(command.startswith(prefix) for prefix in self.failures):
            raise ExternalCommandError(command, 101, "boom" if capture else "")
        if args[1:2] == ("metadata",):
            return self.metadata
        return ""

    @property
    def commands(self) -> list[str]:
        return [command for command, _ in self.calls]

    @property
    def actions(self) -> list[str]:
        """Commands other than the metadata query."""
        return [c for c in self.commands if not c.startswith("cargo metadata")]


def cargo_metadata_json(root: Path, versions: dict[str, str]) -> str:
    """Build `cargo metadata --no-deps` output for crates at root/<name>."""
    packages = [
        {
            "name": name,
            "version": version,
            "id": f"path+file://{root / name}#{name}@{version}",
            "manifest_path": str(root / name / "Cargo.toml"),
            "dependencies": [],
            "targets": [],
        }
        for name, version in versions.items()
    ]
    return json.dumps(
        {
            "packages": packages,
            "workspace_members": [p["id"] for p in packages],
            "workspace_default_members": [p["id"] for p in packages],
            "resolve": None,
            "target_directory": str(root / "target"),
            "version": 1,
            "workspace_root": str(root),
        }
    )


@pytest.fixture(autouse=True)
def _no_cargo_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Tests may run under cargo; don't let its CARGO leak into configs."""
    monkeypatch.delenv("CARGO", raising=False)


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """A workspace root with a minimal Cargo.toml."""
    (tmp_path / "Cargo.toml").write_text(
        '[workspace]\nmembers = ["crux_*"]\nresolver = "2"\n'
    )
    return tmp_path


@pytest.fixture
def crux_versions() -> dict[str, str]:
    return {
        "crux_cli": "0.1.0",
        "crux_macros": "0.4.0",
        "crux_core": "0.9.0",
        "crux_http": "0.10.0",
        "crux_kv": "0.5.0",
        "crux_platform": "0.2.0",
        "crux_time": "0.5.0",
    }


@pytest.fixture
def make_shell(workspace: Path, crux_versions: dict[str, str]):
    """Factory for a RecordingShell rooted at the workspace."""

    def _make(
        versions: dict[str, str] | None = None, failures: tuple[str, ...] = ()
    ) -> RecordingShell:
        metadata = cargo_metadata_json(
            workspace, crux_versions if versions is None else versions
        )
        return RecordingShell(workspace, metadata=metadata, failures=failures)

    return _make
