"""
Client-side OTP resend throttle.

At most ``max_requests`` resends per screen lifetime and at least
``cooldown_seconds`` between two of them. Violations are reported without
contacting the backend.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class OtpThrottleError(RuntimeError):
    """Raised when an OTP resend is blocked locally."""

    def __init__(self, message: str, remaining_seconds: int = 0) -> None:
        super().__init__(message)
        self.remaining_seconds = remaining_seconds


@dataclass
class OtpThrottle:
    max_requests: int = 5
    cooldown_seconds: int = 60
    clock: Clock = utc_now
    request_count: int = 0
    last_request_at: Optional[datetime] = field(default=None)

    @property
    def exhausted(self) -> bool:
        return self.request_count >= self.max_requests

    def remaining_wait(self, now: Optional[datetime] = None) -> int:
        """Whole seconds until the next resend is allowed (0 when allowed)."""
        if self.last_request_at is None:
            return 0

        now = now or self.clock()
        ready_at = self.last_request_at + timedelta(seconds=self.cooldown_seconds)
        if now >= ready_at:
            return 0
        return math.ceil((ready_at - now).total_seconds())

    def check(self, now: Optional[datetime] = None) -> None:
        """
        Raises:
            OtpThrottleError: When the cooldown is running or the ceiling is hit.
        """
        remaining = self.remaining_wait(now)
        if remaining > 0:
            raise OtpThrottleError(
                f"Please wait {remaining} seconds before requesting another OTP",
                remaining_seconds=remaining,
            )

        if self.exhausted:
            raise OtpThrottleError("Too many OTP requests. Please try again later.")

    def reserve(self) -> Optional[datetime]:
        """
        Check and claim a slot before the network call.

        Returns:
            The previous request timestamp, to hand back to ``release`` if
            the call fails.
        """
        now = self.clock()
        self.check(now)

        previous = self.last_request_at
        self.request_count += 1
        self.last_request_at = now
        return previous

    def release(self, previous: Optional[datetime]) -> None:
        """Give back a slot claimed by ``reserve``; failed sends do not count."""
        self.request_count = max(0, self.request_count - 1)
        self.last_request_at = previous
