"""
core/prober.py
Single timed TCP-connect probe.

  • asyncio.open_connection: no raw sockets, no payload ever exchanged
  • Connect attempt raced against a loop.call_later timer
  • At-most-once settlement: one result future, guarded by _settle();
    the winner cancels the loser (timer handle or connect task)
  • Socket closed (open) or aborted (every other branch) before returning

Layering: imports only utils.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Tuple

from utils.constants import ProbeStatus
from utils.logger import get_logger

log = get_logger("check_connection.prober")

Connector = Callable[
    [str, int], Awaitable[Tuple[asyncio.StreamReader, asyncio.StreamWriter]]
]


# ─── Outcome ──────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ProbeOutcome:
    """
    Tagged result of one probe. Build through the named constructors:

        ProbeOutcome.open()
        ProbeOutcome.closed("Connection reset by 10.0.0.1:22")
        ProbeOutcome.timed_out(5000)
        ProbeOutcome.error("Connection refused by 10.0.0.1:22")
    """
    status:   ProbeStatus
    reason:   Optional[str] = None
    after_ms: Optional[int] = None

    @property
    def is_open(self) -> bool:
        return self.status == ProbeStatus.OPEN

    @classmethod
    def open(cls) -> "ProbeOutcome":
        return cls(ProbeStatus.OPEN)

    @classmethod
    def closed(cls, reason: str) -> "ProbeOutcome":
        return cls(ProbeStatus.CLOSED, reason=reason)

    @classmethod
    def timed_out(cls, after_ms: int) -> "ProbeOutcome":
        return cls(
            ProbeStatus.TIMED_OUT,
            reason=f"Timed out after {after_ms}ms",
            after_ms=after_ms,
        )

    @classmethod
    def error(cls, message: str) -> "ProbeOutcome":
        return cls(ProbeStatus.ERROR, reason=message)


# ─── Prober ───────────────────────────────────────────────────────────────────

class PortProber:
    """
    One TCP connection attempt per call to probe().

    The connector is injectable so tests can stand in a connect that never
    completes; it defaults to asyncio.open_connection.
    """

    def __init__(self, connector: Optional[Connector] = None):
        self._connect: Connector = connector or asyncio.open_connection

    async def probe(self, ip: str, port: int, timeout_ms: int) -> ProbeOutcome:
        """Race connect against timeout_ms. Never raises for network errors."""
        loop = asyncio.get_running_loop()
        settled: asyncio.Future = loop.create_future()
        t0 = time.monotonic()

        def _settle(outcome: ProbeOutcome) -> bool:
            # Single-use guard: only the first branch gets through.
            if settled.done():
                return False
            settled.set_result(outcome)
            return True

        attempt = asyncio.ensure_future(self._connect(ip, port))

        def _on_timer() -> None:
            if _settle(ProbeOutcome.timed_out(timeout_ms)):
                attempt.cancel()

        timer = loop.call_later(timeout_ms / 1000.0, _on_timer)

        def _on_attempt_done(task: asyncio.Future) -> None:
            if task.cancelled():
                return
            exc = task.exception()
            outcome = ProbeOutcome.open() if exc is None else self._classify(exc, ip, port)
            if _settle(outcome):
                timer.cancel()

        attempt.add_done_callback(_on_attempt_done)

        try:
            outcome = await settled
        finally:
            timer.cancel()
            attempt.cancel()
            graceful = (
                settled.done()
                and not settled.cancelled()
                and settled.result().is_open
            )
            await self._release(attempt, graceful)

        log.debug(
            f"{ip}:{port} → {outcome.status.name} "
            f"in {(time.monotonic() - t0) * 1000:.1f}ms"
        )
        return outcome

    # ── Internals ─────────────────────────────────────────────────────────────

    @staticmethod
    async def _release(attempt: asyncio.Future, graceful: bool) -> None:
        """Wait for the connect task to finish, then close or abort its socket."""
        await asyncio.wait({attempt})
        if attempt.cancelled() or attempt.exception() is not None:
            return

        _, writer = attempt.result()
        if not graceful:
            # Connected after the race was already lost
            writer.transport.abort()
            return
        writer.close()
        try:
            await writer.wait_closed()
        except OSError:
            pass

    @staticmethod
    def _classify(exc: BaseException, ip: str, port: int) -> ProbeOutcome:
        if isinstance(exc, ConnectionRefusedError):
            return ProbeOutcome.error(f"Connection refused by {ip}:{port}")
        if isinstance(exc, (ConnectionResetError, ConnectionAbortedError)):
            return ProbeOutcome.closed(f"Connection reset by {ip}:{port}")
        if isinstance(exc, OSError):
            return ProbeOutcome.error(exc.strerror or str(exc) or type(exc).__name__)
        return ProbeOutcome.error(f"{type(exc).__name__}: {exc}")


# ─── Module-level convenience ────────────────────────────────────────────────

_prober = PortProber()


async def probe(ip: str, port: int, timeout_ms: int) -> ProbeOutcome:
    """Module-level convenience function."""
    return await _prober.probe(ip, port, timeout_ms)
