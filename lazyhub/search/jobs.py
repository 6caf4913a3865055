"""Background job runner used for blocking directory calls.

Workers never touch controller state; they only post tagged events to a
queue that the owning component drains on the host thread.
"""

from __future__ import annotations

import threading
from collections.abc import Callable

JobRunner = Callable[[Callable[[], None], str], None]


def start_daemon_thread(job: Callable[[], None], name: str) -> None:
    """Run ``job`` on a fresh daemon thread named ``name``."""
    worker = threading.Thread(target=job, name=name, daemon=True)
    worker.start()
