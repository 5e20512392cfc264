"""
Rate Limiter Utility
Token bucket rate limiter shared by API providers
"""
import asyncio
import time
from typing import Dict


class RateLimiter:
    """
    Token bucket keyed by service name.

    Providers rebuilt after a settings change look the bucket up again
    and keep sharing it, so a provider swap does not reset the budget.
    """

    _instances: Dict[str, "RateLimiter"] = {}

    def __init__(self, service_name: str, rate: int):
        self.service_name = service_name
        self.rate = rate  # requests per second, 0 disables limiting
        self.tokens = float(rate)
        self.last_update = time.monotonic()
        self.lock = asyncio.Lock()

    @classmethod
    def get_limiter(cls, service_name: str, rate: int) -> "RateLimiter":
        """Get the shared limiter for a service, replacing it if the rate changed"""
        limiter = cls._instances.get(service_name)
        if limiter is None or limiter.rate != rate:
            limiter = cls(service_name, rate)
            cls._instances[service_name] = limiter
        return limiter

    @classmethod
    def reset(cls):
        """Forget every shared limiter"""
        cls._instances.clear()

    def _refill(self, now: float):
        self.tokens = min(float(self.rate), self.tokens + (now - self.last_update) * self.rate)
        self.last_update = now

    async def acquire(self):
        """Take one token, sleeping until one is available"""
        if self.rate <= 0:
            return

        async with self.lock:
            self._refill(time.monotonic())
            if self.tokens < 1:
                await asyncio.sleep((1 - self.tokens) / self.rate)
                self._refill(time.monotonic())
            self.tokens -= 1
