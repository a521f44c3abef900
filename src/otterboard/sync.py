"""Background sync between the session snapshot and the board store.

Pull every ``interval`` seconds; push whenever the local snapshot
changes. Both sides compare the canonical JSON of the snapshot with a
single last-synced marker, so a snapshot that came from the server is
never pushed back and an unchanged remote copy is never reinstalled.
Concurrent editors are last-write-wins.
"""

from __future__ import annotations

import asyncio
import logging

from otterboard.api import BoardsApi
from otterboard.errors import AuthenticationRequired, OtterboardError
from otterboard.model.session import BoardSession
from otterboard.model.snapshot import serialize

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 5.0


class SyncLoop:
    """Keeps one selected board in sync with the store."""

    def __init__(self, session: BoardSession, api: BoardsApi, interval: float = DEFAULT_INTERVAL) -> None:
        self.session = session
        self.api = api
        self.interval = interval
        self.last_synced: str | None = None
        self._task: asyncio.Task | None = None
        self._push_tasks: set[asyncio.Task] = set()
        self._token: int | None = None
        session.watch("snapshot", self._on_snapshot_changed)

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self, board_id: str) -> None:
        """Select board_id and start pulling it. Stops any previous board first."""
        self.stop()
        self.last_synced = None
        self._token = self.session.open(board_id)
        self._task = asyncio.create_task(self._run(self._token))

    def stop(self) -> None:
        """Stop the timer and drop the board. Late responses are ignored."""
        if self._task is not None:
            self._task.cancel()
            self._task = None
        for task in self._push_tasks:
            task.cancel()
        self._push_tasks.clear()
        self._token = None
        self.last_synced = None
        if self.session.board_id is not None:
            self.session.close()

    async def _run(self, token: int) -> None:
        while self.session.is_active(token):
            try:
                await self.pull(token)
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception("sync pull failed")
            await asyncio.sleep(self.interval)

    async def pull(self, token: int | None = None) -> bool:
        """Fetch the board and install it if it differs from the last-synced copy.

        Returns True if the local snapshot was replaced.
        """
        token = self.session.token if token is None else token
        board_id = self.session.board_id
        if board_id is None or not self.session.is_active(token):
            return False

        self.session.set_sync_status("pull")
        try:
            board = await self.api.get_board(board_id)
        except OtterboardError as exc:
            if self.session.is_active(token):
                self._report(exc, "Failed to load board data.")
            return False
        finally:
            self.session.set_sync_status("idle")

        if not self.session.is_active(token):
            logger.debug("discarding pull for inactive board %s", board_id)
            return False

        remote = serialize(board.result)
        if remote == self.last_synced:
            return False
        self.last_synced = remote
        self.session.install(board.result)
        return True

    async def push(self, token: int | None = None) -> bool:
        """Send the local snapshot if it differs from the last-synced copy.

        Returns True if an update was sent.
        """
        token = self.session.token if token is None else token
        board_id = self.session.board_id
        snapshot = self.session.snapshot
        if board_id is None or snapshot is None or not self.session.is_active(token):
            return False

        local = serialize(snapshot)
        if local == self.last_synced:
            return False
        self.last_synced = local

        self.session.set_sync_status("push")
        try:
            await self.api.update_board(board_id, snapshot)
        except OtterboardError as exc:
            if self.session.is_active(token):
                self._report(exc, "Failed to save board changes.")
            return False
        finally:
            self.session.set_sync_status("idle")
        return True

    def _on_snapshot_changed(self, node, key, old, new) -> None:
        if self._token is None or new is None:
            return
        if serialize(new) == self.last_synced:
            return
        try:
            task = asyncio.get_running_loop().create_task(self.push(self._token))
        except RuntimeError:
            logger.debug("no running loop; push deferred to next change")
            return
        self._push_tasks.add(task)
        task.add_done_callback(self._push_tasks.discard)

    def _report(self, exc: OtterboardError, fallback: str) -> None:
        logger.warning("sync failed: %s", exc)
        if isinstance(exc, AuthenticationRequired):
            self.session.state.signed_out = True
            return
        self.session.report_error(str(exc) or fallback)
