"""Fake requests session used to exercise HTTP export fetches."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class FakeResponse:
    """Minimal stand-in for ``requests.Response``."""

    status_code: int
    content: bytes = b""


@dataclass
class FakeSession:
    """Records GET calls and returns a canned response or raises."""

    response: FakeResponse | None = None
    error: Exception | None = None
    calls: list[tuple[str, float | None]] = field(default_factory=list)

    def get(self, url: str, timeout: float | None = None) -> FakeResponse:
        self.calls.append((url, timeout))
        if self.error is not None:
            raise self.error
        assert self.response is not None
        return self.response
