from __future__ import annotations

from typing import Optional

import pytest


class CapturingSink:
    def __init__(self) -> None:
        self.records: list[tuple[str, str, Optional[BaseException]]] = []

    def record_failure(
        self,
        message: str,
        *,
        error: Optional[BaseException] = None,
        severity: str = "error",
    ) -> None:
        self.records.append((severity, message, error))

    @property
    def messages(self) -> list[str]:
        return [message for _, message, _ in self.records]


@pytest.fixture
def sink() -> CapturingSink:
    return CapturingSink()
