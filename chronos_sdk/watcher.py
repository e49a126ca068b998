"""
Consensus watcher for chronos SDK.

Polls the scanner for tracked consensus operations and fires callbacks
when a chain confirms, when 2-of-3 consensus is reached, and when an
operation fails or expires.
"""

import time
import logging
import threading
from typing import Dict, List, Callable, Optional
from dataclasses import dataclass

from .core import ConsensusOperation
from .errors import SDKError, TimeoutError
from .trinity.api import TrinityProtocolClient, TERMINAL_FAILURE_STATES

log = logging.getLogger(__name__)


@dataclass
class WatcherConfig:
    """Watcher configuration."""
    poll_interval: float = 5.0       # seconds between scanner polls
    untrack_on_finish: bool = True   # Drop operations once they settle


class ConsensusWatcher:
    """
    Background service that watches consensus operations.

    Events:
    - on_confirmation(op, previous): confirmation count went up
    - on_consensus(op): confirmations reached the threshold
    - on_failed(op): operation failed or expired
    """

    def __init__(self, trinity: TrinityProtocolClient, config: WatcherConfig = None):
        self.trinity = trinity
        self.config = config or WatcherConfig()

        # Callbacks
        self.on_confirmation: Optional[Callable[[ConsensusOperation, int], None]] = None
        self.on_consensus: Optional[Callable[[ConsensusOperation], None]] = None
        self.on_failed: Optional[Callable[[ConsensusOperation], None]] = None

        # operation_id -> last seen confirmation count
        self._tracked: Dict[str, int] = {}
        self._lock = threading.Lock()

        # State
        self._running = False
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def track(self, operation_id: str):
        with self._lock:
            self._tracked.setdefault(operation_id, 0)
        log.debug(f"Tracking consensus operation {operation_id}")

    def untrack(self, operation_id: str):
        with self._lock:
            self._tracked.pop(operation_id, None)

    def tracked(self) -> List[str]:
        with self._lock:
            return list(self._tracked)

    def start(self):
        """Start watcher in background thread."""
        if self._running:
            return

        self._running = True
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._watch_loop, daemon=True)
        self._thread.start()
        log.info("Consensus watcher started")

    def stop(self):
        """Stop watcher."""
        self._running = False
        self._stop_event.set()
        if self._thread:
            self._thread.join(timeout=5)
        log.info("Consensus watcher stopped")

    @property
    def running(self) -> bool:
        return self._running

    def _watch_loop(self):
        while self._running:
            try:
                self.poll_once()
            except Exception as e:
                log.error(f"Watcher error: {e}")

            self._stop_event.wait(self.config.poll_interval)

    def poll_once(self):
        """Check every tracked operation once."""
        for operation_id in self.tracked():
            try:
                op = self.trinity.get_consensus_operation(operation_id)
            except SDKError as e:
                log.warning(f"Failed to poll operation {operation_id}: {e}")
                continue
            self._process(op)

    def _process(self, op: ConsensusOperation):
        with self._lock:
            previous = self._tracked.get(op.id, 0)
            self._tracked[op.id] = op.confirmations

        if op.confirmations > previous:
            log.info(f"Operation {op.id}: {op.confirmations}/{op.required_confirmations} confirmations")
            if self.on_confirmation:
                self.on_confirmation(op, previous)

        if op.has_consensus:
            log.info(f"Consensus reached for {op.id}")
            if self.on_consensus:
                self.on_consensus(op)
            self._finish(op.id)
        elif op.status in TERMINAL_FAILURE_STATES:
            log.warning(f"Operation {op.id} {op.status} at {op.confirmations} confirmations")
            if self.on_failed:
                self.on_failed(op)
            self._finish(op.id)

    def _finish(self, operation_id: str):
        if self.config.untrack_on_finish:
            self.untrack(operation_id)

    def watch_single_operation(self, operation_id: str, timeout: int = 600) -> ConsensusOperation:
        """
        Watch a single operation until it settles or times out.

        Blocking call - use for CLI or testing.

        Args:
            operation_id: Operation to watch
            timeout: Max seconds to wait

        Returns:
            Final operation state (consensus reached, failed or expired)
        """
        start = time.time()

        while time.time() - start < timeout:
            op = self.trinity.get_consensus_operation(operation_id)
            if op.has_consensus or op.status in TERMINAL_FAILURE_STATES:
                return op
            time.sleep(self.config.poll_interval)

        raise TimeoutError(f"Operation {operation_id} did not settle in {timeout}s",
                           operation="watch_single_operation", timeout=timeout)


class ConsensusMonitor:
    """
    Event registry over a ConsensusWatcher.

    Events: "confirmation", "consensus", "failed".
    """

    def __init__(self, trinity: TrinityProtocolClient, config: WatcherConfig = None):
        self.watcher = ConsensusWatcher(trinity, config)

        # Event handlers
        self._handlers: Dict[str, List[Callable]] = {
            "confirmation": [],
            "consensus": [],
            "failed": [],
        }

        # Wire up watcher callbacks
        self.watcher.on_confirmation = self._on_confirmation
        self.watcher.on_consensus = self._on_consensus
        self.watcher.on_failed = self._on_failed

    def on(self, event: str, handler: Callable):
        """Register event handler."""
        if event not in self._handlers:
            raise ValueError(f"Unknown event: {event}")
        self._handlers[event].append(handler)

    def off(self, event: str, handler: Callable):
        """Remove event handler."""
        if event in self._handlers and handler in self._handlers[event]:
            self._handlers[event].remove(handler)

    def _emit(self, event: str, *args):
        """Emit event to handlers."""
        for handler in self._handlers.get(event, []):
            try:
                handler(*args)
            except Exception as e:
                log.error(f"Handler error for {event}: {e}")

    def _on_confirmation(self, op: ConsensusOperation, previous: int):
        self._emit("confirmation", op, previous)

    def _on_consensus(self, op: ConsensusOperation):
        self._emit("consensus", op)

    def _on_failed(self, op: ConsensusOperation):
        self._emit("failed", op)

    def track(self, operation_id: str):
        self.watcher.track(operation_id)

    def start(self):
        """Start monitoring."""
        self.watcher.start()

    def stop(self):
        """Stop monitoring."""
        self.watcher.stop()
