from __future__ import annotations

import threading
import time


class RequestThrottle:
    """Minimum spacing between outbound SEC requests.

    One instance is shared by every call site in the process (see get_throttle), so a
    request to any SEC host advances the same clock. The lock makes read-then-write of
    the last request time atomic, so two threads can never both pass on a stale value.
    """

    def __init__(self, min_interval_seconds: float = 0.1):
        self.min_interval_seconds = float(min_interval_seconds or 0.0)
        self._last_request_mono: float | None = None
        self._lock = threading.Lock()

    def wait(self) -> float:
        """Sleep until the interval has elapsed since the previous call, then record now.

        Returns the number of seconds slept.
        """
        with self._lock:
            slept = 0.0
            if self.min_interval_seconds > 0 and self._last_request_mono is not None:
                dt = time.monotonic() - self._last_request_mono
                if dt < self.min_interval_seconds:
                    slept = self.min_interval_seconds - dt
                    time.sleep(slept)
            self._last_request_mono = time.monotonic()
            return slept

    def reset(self) -> None:
        with self._lock:
            self._last_request_mono = None


# Per-process polite throttling for SEC endpoints.
_SEC_THROTTLE: RequestThrottle | None = None
_SEC_THROTTLE_LOCK = threading.Lock()


def get_throttle(min_interval_seconds: float | None = None) -> RequestThrottle:
    """Return the process-wide throttle, creating it on first use.

    The interval is fixed by whichever caller creates it; later arguments are ignored.
    """
    global _SEC_THROTTLE
    with _SEC_THROTTLE_LOCK:
        if _SEC_THROTTLE is None:
            interval = 0.1 if min_interval_seconds is None else min_interval_seconds
            _SEC_THROTTLE = RequestThrottle(interval)
        return _SEC_THROTTLE
