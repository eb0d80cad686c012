from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional


@dataclass(frozen=True)
class Toast:
    kind: str  # "success" or "error"
    title: str
    description: Optional[str] = None


@dataclass
class Notifier:
    """Collects the transient messages a page would show as toasts."""

    toasts: List[Toast] = field(default_factory=list)

    def success(self, title: str, description: str | None = None) -> None:
        self.toasts.append(Toast("success", title, description))

    def error(self, title: str, description: str | None = None) -> None:
        self.toasts.append(Toast("error", title, description))

    @property
    def last(self) -> Optional[Toast]:
        return self.toasts[-1] if self.toasts else None

    def clear(self) -> None:
        self.toasts.clear()


ClipboardWriter = Callable[[str], None]


class CopiedIndicator:
    """Flag that reads True for ``duration`` seconds after it is set."""

    def __init__(self, duration: float = 2.0, clock: Callable[[], float] = time.monotonic) -> None:
        self._duration = duration
        self._clock = clock
        self._set_at: float | None = None

    def set(self) -> None:
        self._set_at = self._clock()

    @property
    def active(self) -> bool:
        if self._set_at is None:
            return False
        if self._clock() - self._set_at >= self._duration:
            self._set_at = None
            return False
        return True


def copy_text(text: str, writer: ClipboardWriter, indicator: CopiedIndicator, notifier: Notifier) -> bool:
    if not text:
        return False
    writer(text)
    indicator.set()
    notifier.success("Copied to clipboard!")
    return True
