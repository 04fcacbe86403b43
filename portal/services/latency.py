"""
Simulated network latency.

The portal has no server; these delays only make a demo feel like one.
Disabled unless PortalOptions.latency_scale is above zero.
"""

import asyncio


# Seconds per call at latency_scale=1.0
REGISTER_DELAY = 1.0
LOGIN_DELAY = 1.0
CURRENT_USER_DELAY = 0.3
LOGOUT_DELAY = 0.5
USER_ITEMS_DELAY = 0.8
ALL_ITEMS_DELAY = 0.5
STATES_DELAY = 0.3
SET_STATE_DELAY = 0.2
LOGS_DELAY = 0.3
AUDIT_TRAIL_DELAY = 0.3


class SimulatedLatency:
    """Sleeps for a scaled delay before a service call does its work"""

    def __init__(self, scale: float = 0.0, sleep=asyncio.sleep):
        self.scale = scale
        self._sleep = sleep

    async def wait(self, seconds: float) -> None:
        if self.scale <= 0:
            return
        await self._sleep(seconds * self.scale)
