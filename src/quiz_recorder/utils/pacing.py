import asyncio
import time
from typing import List, Tuple
import logging

class Pacer:
    """Named, configurable suspension points for the question loop."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self.history: List[Tuple[str, int]] = []
        self.total_paused = 0.0

    async def pause(self, name: str, duration_ms: int) -> None:
        """Suspend for ``duration_ms`` milliseconds. Not cancellable from inside the loop."""
        self.history.append((name, duration_ms))
        if duration_ms <= 0:
            return

        self.logger.debug(f"Pausing for {name}: {duration_ms}ms")
        started = time.monotonic()
        await asyncio.sleep(duration_ms / 1000)
        self.total_paused += time.monotonic() - started

    def pauses_named(self, name: str) -> List[int]:
        return [duration for pause_name, duration in self.history if pause_name == name]
