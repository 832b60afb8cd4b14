"""
In-memory knowledge snapshot with reload.

Requests call `current()` once and keep that Snapshot for the whole request.
`reload()` builds a complete new Snapshot and only then replaces the
reference, so a reader never sees a half-loaded state. Reloads themselves are
serialized; reads never take the lock.
"""

from __future__ import annotations

import threading
from datetime import datetime, timezone
from typing import Optional

from portfolio_bot.logger import get_logger
from .chunker import DEFAULT_MAX_LEN
from .knowledge import load_knowledge
from .profiles import load_legacy_profile, load_profiles
from .types import Snapshot

logger = get_logger(__name__)

DEFAULT_RELOAD_SECONDS = 5 * 60


class KnowledgeBase:
    def __init__(
        self,
        profiles_path: str,
        knowledge_dir: str,
        legacy_profile_path: Optional[str] = None,
        chunk_max_len: int = DEFAULT_MAX_LEN,
    ):
        self.profiles_path = profiles_path
        self.knowledge_dir = knowledge_dir
        self.legacy_profile_path = legacy_profile_path
        self.chunk_max_len = chunk_max_len

        self._snapshot: Optional[Snapshot] = None
        self._reload_lock = threading.Lock()
        self._stop = threading.Event()
        self._timer: Optional[threading.Thread] = None

    # -------------------------
    # Snapshot access
    # -------------------------
    def current(self) -> Snapshot:
        snap = self._snapshot
        if snap is None:
            snap = self.reload()
        return snap

    def reload(self) -> Snapshot:
        with self._reload_lock:
            prev = self._snapshot
            legacy = load_legacy_profile(self.legacy_profile_path) if self.legacy_profile_path else {}
            profiles = load_profiles(self.profiles_path)
            chunks = tuple(load_knowledge(self.knowledge_dir, max_len=self.chunk_max_len))
            snap = Snapshot(
                profiles=profiles,
                chunks=chunks,
                legacy_profile=legacy,
                loaded_at=datetime.now(timezone.utc).isoformat(),
                version=(prev.version + 1) if prev else 1,
            )
            self._snapshot = snap

        logger.info(
            f"Knowledge loaded: {len(snap.chunks)} chunks | profiles: {len(snap.profiles.profiles)} "
            f"| defaultProfile: {snap.profiles.default} | {snap.loaded_at}"
        )
        return snap

    # -------------------------
    # Timed reload
    # -------------------------
    def _run_timer(self, interval: float) -> None:
        while not self._stop.wait(interval):
            try:
                self.reload()
            except Exception:
                logger.exception("Scheduled knowledge reload failed")

    def start_auto_reload(self, interval: float = DEFAULT_RELOAD_SECONDS) -> None:
        if self._timer is not None and self._timer.is_alive():
            return
        if interval <= 0:
            logger.info("Knowledge auto-reload disabled")
            return
        self._stop.clear()
        self._timer = threading.Thread(
            target=self._run_timer, args=(interval,), name="knowledge-reload", daemon=True
        )
        self._timer.start()
        logger.info(f"Knowledge auto-reload every {interval:g}s")

    def stop_auto_reload(self) -> None:
        self._stop.set()
        if self._timer is not None:
            self._timer.join(timeout=5)
            self._timer = None
