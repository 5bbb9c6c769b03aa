from __future__ import annotations

import logging
import time
from typing import Protocol

from nicegui import ui

from app.constants import ERROR_PREFIX, UPDATE_INTERVAL_S
from app.services.wall_eno_client import StatusFetchError
from app.state import DisplayState, StatusSnapshot

logger = logging.getLogger(__name__)


class StatusSource(Protocol):
    async def fetch_status(self) -> StatusSnapshot: ...


class StatusPoller:
    """
    Periodically fetch the wall-eno status and settle it onto a DisplayState.

    Each cycle is tagged with a sequence number; a completion that arrives
    after a newer cycle has already settled is dropped, so slow responses
    never overwrite fresher data. A failed cycle only touches ``error``.
    """

    def __init__(
        self,
        client: StatusSource,
        state: DisplayState,
        interval: float = UPDATE_INTERVAL_S,
    ) -> None:
        self.client = client
        self.state = state
        self.interval = interval
        self.timer: ui.timer | None = None
        self._issued = 0  # last sequence number handed out
        self._settled_seq = 0  # sequence number currently on display
        self._in_flight = 0

    @property
    def pending(self) -> int:
        """Cycles issued but not yet settled."""
        return self._in_flight

    def start(self) -> ui.timer:
        """Poll now, then every ``interval`` seconds for the lifetime of the page."""
        self.timer = ui.timer(
            interval=self.interval, callback=self.poll_once, immediate=True
        )
        return self.timer

    async def poll_once(self) -> None:
        self._issued += 1
        seq = self._issued
        self._in_flight += 1
        try:
            snapshot = await self.client.fetch_status()
        except StatusFetchError as e:
            self._settle_failure(seq, e)
        else:
            self._settle(seq, snapshot)
        finally:
            self._in_flight -= 1

    def _claim(self, seq: int) -> bool:
        if seq < self._settled_seq:
            logger.debug(
                "Dropping stale poll #%d (display already at #%d)",
                seq,
                self._settled_seq,
            )
            return False
        self._settled_seq = seq
        return True

    def _settle(self, seq: int, snapshot: StatusSnapshot) -> None:
        if not self._claim(seq):
            return
        # All fields written without yielding to the loop
        state = self.state
        state.home_power = snapshot.home_power
        state.home_raw = snapshot.home_raw
        state.wallbox_power = snapshot.wallbox_power
        state.wallbox_current = snapshot.wallbox_current
        state.error = snapshot.error
        state.last_update_ts = time.time()
        if snapshot.error:
            logger.info("wall-eno reported: %s", snapshot.error)
        else:
            logger.debug(
                "Status #%d: home=%s kW (raw %s) wallbox=%s kW / %s A",
                seq,
                snapshot.home_power,
                snapshot.home_raw,
                snapshot.wallbox_power,
                snapshot.wallbox_current,
            )

    def _settle_failure(self, seq: int, exc: StatusFetchError) -> None:
        if not self._claim(seq):
            return
        self.state.error = f"{ERROR_PREFIX}{exc.diagnostic}"
        logger.warning("Status poll #%d failed (%s): %s", seq, type(exc).__name__, exc.diagnostic)
