"""Debounced calls: only the latest submission within the delay actually runs."""

import logging
import threading

log = logging.getLogger("routemap")


class DebouncedCall:
    """Run `func` once input has been quiet for `delay` seconds.

    Each `submit` cancels the pending call, if any, and schedules a new one
    with the latest arguments.
    """

    def __init__(self, func, delay):
        self.func = func
        self.delay = delay
        self._lock = threading.Lock()
        self._timer = None

    def _run(self, timer, args, kwargs):
        with self._lock:
            if self._timer is not timer:
                return
            self._timer = None
        self.func(*args, **kwargs)

    def submit(self, *args, **kwargs):
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            timer = threading.Timer(self.delay, lambda: self._run(timer, args, kwargs))
            timer.daemon = True
            self._timer = timer
        timer.start()
        return timer

    def cancel(self):
        with self._lock:
            timer, self._timer = self._timer, None
        if timer is not None:
            timer.cancel()
            log.debug("Cancelled pending call to %s", getattr(self.func, "__name__", self.func))

    @property
    def pending(self):
        with self._lock:
            return self._timer is not None
