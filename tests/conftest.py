import os
from typing import Any

import pytest

from minbasic.minbasic_errors import InputCancelled

# Monkeypatch coverage to bypass teardown crash in act/docker
if os.getenv("COVERAGE_PROCESS_START"):
    import coverage

    coverage.process_startup()

    # Nukes the teardown assertion that fails in act
    import coverage.collector

    def safe_stop(self: Any) -> None:
        if self in getattr(self, "_collectors", []):
            self._collectors.remove(self)

    coverage.collector.Collector.stop = safe_stop


@pytest.fixture(autouse=True)  # type: ignore[misc]
def no_env_step_limit(monkeypatch: pytest.MonkeyPatch) -> None:
    # A developer's shell setting must not leak into CLI defaults under test
    monkeypatch.delenv("MINBASIC_MAX_STEPS", raising=False)


class RecordingIO:
    """Output sink and scripted input provider for driving programs in tests."""

    def __init__(self, inputs: list[int] | None = None) -> None:
        self.lines: list[str] = []
        self.inputs = list(inputs or [])

    def output(self, text: str) -> None:
        self.lines.append(text)

    def provide(self) -> int:
        if not self.inputs:
            raise InputCancelled()
        return self.inputs.pop(0)


@pytest.fixture  # type: ignore[misc]
def recording_io() -> RecordingIO:
    return RecordingIO()
