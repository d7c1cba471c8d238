"""
Transient user notifications ("toasts").

Page actions push a toast for every outcome the user must see, most
importantly data-access failures, which never close the open form.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List


@dataclass
class Toast:
    level: str  # 'success' | 'error' | 'info'
    message: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class Notifier:
    """Collects toasts until the shell drains and displays them."""

    def __init__(self):
        self.toasts: List[Toast] = []

    def success(self, message: str) -> Toast:
        return self._push("success", message)

    def error(self, message: str) -> Toast:
        return self._push("error", message)

    def info(self, message: str) -> Toast:
        return self._push("info", message)

    def _push(self, level: str, message: str) -> Toast:
        toast = Toast(level=level, message=message)
        self.toasts.append(toast)
        return toast

    @property
    def last(self):
        return self.toasts[-1] if self.toasts else None

    def drain(self) -> List[Toast]:
        """Return and forget all pending toasts."""
        toasts, self.toasts = self.toasts, []
        return toasts
