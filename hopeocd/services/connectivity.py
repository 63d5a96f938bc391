# connectivity monitor: online/offline signal for the hosted backend
# fed by explicit signals and by periodic pings; subscribers run when we come back online

import asyncio
import logging
from typing import Awaitable, Callable

from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)

Listener = Callable[[], Awaitable[None]]


class Connectivity:
    def __init__(self, online: bool = True):
        self.online = online
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener):
        self._listeners.append(listener)

    async def set_online(self, online: bool):
        was_online = self.online
        self.online = online
        if online == was_online:
            return

        logger.info("Backend is online" if online else "Backend is offline")
        if online:
            for listener in self._listeners:
                # a failing listener must not stop the others or the watch loop
                try:
                    await listener()
                except Exception as e:
                    logger.error(f"Reconnect listener failed: {e!r}")

    async def probe(self, db) -> bool:
        """ping the backend and record the outcome"""
        try:
            await db.ping()
            reachable = True
        except (PyMongoError, OSError) as e:
            logger.warning(f"Backend ping failed: {e}")
            reachable = False
        await self.set_online(reachable)
        return reachable

    async def watch(self, db, interval: float):
        while True:
            await asyncio.sleep(interval)
            await self.probe(db)


connectivity = Connectivity()


async def get_connectivity() -> Connectivity:
    """dependency injection for the connectivity monitor"""
    return connectivity
