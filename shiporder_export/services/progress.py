from __future__ import annotations

import sys
from typing import Any

from tqdm import tqdm

"""Order-writing progress bar (tqdm).

The bar is created disabled when stdout is not a TTY, so piped runs and CI
logs only see the labeled log lines.
"""

__all__ = [
    "ProgressTracker",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    return sys.stdout.isatty()


class ProgressTracker:
    """Counts written orders and mirrors the count on a tqdm bar.

    Usable as a context manager; the bar is closed on exit.
    """

    def __init__(self, total: int, *, description: str = "Writing orders", unit: str = "order") -> None:
        self.total = total
        self.description = description
        self.current = 0
        self.enabled = is_tty_enabled()
        self.pbar: tqdm | None = tqdm(
            total=total,
            desc=description,
            unit=unit,
            disable=not self.enabled,
            leave=True,
            ncols=80,
            ascii=True,
        )

    def advance(self, label: str | None = None) -> None:
        """One order written; *label* (its identity) becomes the postfix."""
        self.current += 1
        if self.pbar is None:
            return
        if label:
            self.pbar.set_postfix_str(label, refresh=False)
        self.pbar.update(1)

    def close(self) -> None:
        if self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> ProgressTracker:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
