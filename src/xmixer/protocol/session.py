import logging
import threading
import time

from xmixer import paths
from xmixer.protocol.osc import OutboundMessage
from xmixer.support.schedule import PeriodicSchedule

logger = logging.getLogger(__name__)

# the mixer stops pushing updates about 10s after the last renewal
DEFAULT_KEEPALIVE_PERIOD = 9.0


class SessionKeeper:
    """
    Keeps the mixer pushing parameter updates to this client.

    start() enables push updates once, then tick() renews the subscription each period. tick() is driven by the
    connection's background loop. cancel() is synchronous: once it returns, no renewal is sent.

    :param send: a callable that sends an OutboundMessage
    :param period: the renewal period in seconds
    :param clock: returns the current time in seconds
    """

    def __init__(self, send, period=DEFAULT_KEEPALIVE_PERIOD, clock=time.monotonic):
        self._send = send
        self.period = period
        self._clock = clock
        self._schedule = None
        self._cancelled = False
        self._lock = threading.Lock()

    @property
    def active(self):
        return self._schedule is not None and not self._cancelled

    def start(self):
        """ Enables push updates and schedules the first renewal one period from now. """
        with self._lock:
            if self._cancelled or self._schedule is not None:
                return
            self._send(OutboundMessage(paths.XCONTROL))
            self._schedule = PeriodicSchedule(self.period, last_run=self._clock())
            logger.debug("session started, renewing every %.1fs" % self.period)

    def tick(self, current_time=None) -> bool:
        """
        Renews the subscription if it is due.
        :return: True if the renewal was sent.
        """
        with self._lock:
            if not self.active:
                return False
            if current_time is None:
                current_time = self._clock()
            if self._schedule(current_time) > 0:
                return False
            self._send(OutboundMessage(paths.XREMOTE))
            return True

    def time_to_renewal(self, current_time=None):
        with self._lock:
            if not self.active:
                return None
            return self._schedule(current_time if current_time is not None else self._clock(), dry_run=True)

    def cancel(self):
        """ stops the renewals. Calling cancel more than once has no further effect. """
        with self._lock:
            if self._cancelled:
                return
            self._cancelled = True
            logger.debug("session cancelled")
