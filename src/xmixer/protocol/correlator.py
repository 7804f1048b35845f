"""
Correlates replies from the mixer with the requests that asked for them.

The mixer's replies carry no request id - a reply is recognized only by its address. To avoid one caller receiving
the reply meant for another, calls to the same address are serialized: while a call is in flight, later calls to
that address wait in a queue and are transmitted one at a time as earlier calls resolve.
Calls to different addresses are independent.
"""
import logging
import threading
import time
from collections import OrderedDict, deque

from xmixer.errors import ConnectionClosedError, NotConnectedError, ResponseTimeoutError
from xmixer.protocol.background import FutureValue
from xmixer.protocol.osc import InboundMessage, OutboundMessage

logger = logging.getLogger(__name__)

DEFAULT_RESPONSE_TIMEOUT = 1.0


class PendingCall(FutureValue):
    """ Relates a request with its future reply.
        The result is the InboundMessage, while value() provides the first argument of the reply.
    """

    def __init__(self, request: OutboundMessage, created=None):
        """
        :param request: The request this call is waiting on a reply for.
        """
        super().__init__()
        self._request = request
        self.created = created
        self.deadline = None

    def _value_extractor(self, response: InboundMessage):
        return response.first

    @property
    def request(self) -> OutboundMessage:
        return self._request

    @property
    def address(self) -> str:
        return self._request.address

    @property
    def in_flight(self):
        """ True once the request has been transmitted and the call is waiting for its reply. """
        return self.deadline is not None

    @property
    def response(self) -> InboundMessage:
        """ blocking fetch of the reply. Note that this retrieves
            the entire reply message, and not just the value. """
        return self.result()


class ResponseCorrelator:
    """
    Keeps the table of pending calls and resolves them from inbound messages.

    issue() registers the call and then transmits it, so a reply can never arrive before its caller is waiting.
    match() is called with each inbound message and resolves the in-flight call for that address, if any.
    expire() fails in-flight calls whose deadline has passed.

    :param transmit: a callable that sends an OutboundMessage
    :param timeout: how long an in-flight call waits for its reply, in seconds
    :param clock: returns the current time in seconds
    """

    def __init__(self, transmit, timeout=DEFAULT_RESPONSE_TIMEOUT, clock=time.monotonic):
        self._transmit = transmit
        self.timeout = timeout
        self._clock = clock
        self._pending = OrderedDict()    # address -> deque of PendingCall, head is in flight
        self._lock = threading.RLock()
        self._closed = False

    @property
    def closed(self):
        return self._closed

    def pending_addresses(self):
        with self._lock:
            return tuple(self._pending.keys())

    def pending_count(self, address=None):
        with self._lock:
            if address is not None:
                return len(self._pending.get(address, ()))
            return sum(len(q) for q in self._pending.values())

    def issue(self, request: OutboundMessage) -> PendingCall:
        """ Registers a call for the request's address and transmits the request, unless an earlier call to the same
            address is still in flight, in which case the request is queued behind it.
            :return: the PendingCall that receives the reply.
            :raises NotConnectedError: if the correlator is closed or the request cannot be transmitted
        """
        call = PendingCall(request, self._clock())
        with self._lock:
            if self._closed:
                raise NotConnectedError("cannot issue %s: connection is closed" % request.address)
            queue = self._pending.setdefault(request.address, deque())
            queue.append(call)
            if len(queue) > 1:
                logger.debug("queued %s behind %d pending call(s)" % (request.address, len(queue) - 1))
                return call
            try:
                self._start(call)
            except Exception:
                self._remove(call)
                raise
        return call

    def match(self, message: InboundMessage) -> bool:
        """
        Resolves the in-flight call for the message address.
        :return: True if the message resolved a call. False if it is unsolicited.
        """
        if not message.args:
            return False
        with self._lock:
            call = self._head(message.address)
            if call is None:
                return False
            failed = self._advance(message.address)
        self._resolve(call, message)
        self._fail_all(failed)
        return True

    def expire(self, current_time=None):
        """
        Fails each in-flight call whose deadline has passed with a ResponseTimeoutError.
        :return: the expired calls
        """
        if current_time is None:
            current_time = self._clock()
        expired = []
        failed = []
        with self._lock:
            for address in list(self._pending.keys()):
                call = self._head(address)
                if call is not None and call.deadline <= current_time:
                    expired.append(call)
                    failed.extend(self._advance(address))
        for call in expired:
            logger.warning("no response from %s within %.3fs" % (call.address, self.timeout))
            self._resolve(call, ResponseTimeoutError(call.address, self.timeout))
        self._fail_all(failed)
        return expired

    def close(self):
        """
        Fails every pending call, in flight or queued, with ConnectionClosedError.
        Calling close more than once has no further effect.
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True
            calls = [call for queue in self._pending.values() for call in queue]
            self._pending.clear()
        for call in calls:
            self._resolve(call, ConnectionClosedError(call.address))
        if calls:
            logger.debug("closed with %d pending call(s)" % len(calls))

    def _head(self, address):
        queue = self._pending.get(address)
        if queue and queue[0].in_flight:
            return queue[0]
        return None

    def _start(self, call: PendingCall):
        """ transmits the request and starts the deadline. Called with the lock held. """
        call.deadline = self._clock() + self.timeout
        self._transmit(call.request)

    def _advance(self, address):
        """ removes the in-flight call for the address and transmits the next queued call, if any.
            Called with the lock held.
            :return: calls that could not be transmitted. """
        queue = self._pending[address]
        queue.popleft()
        failed = []
        while queue:
            call = queue[0]
            try:
                self._start(call)
                break
            except Exception as e:
                queue.popleft()
                failed.append((call, e))
        if not queue:
            del self._pending[address]
        return failed

    def _remove(self, call):
        queue = self._pending.get(call.address)
        if queue is not None:
            queue.remove(call)
            if not queue:
                del self._pending[call.address]

    def _fail_all(self, failed):
        for call, e in failed:
            self._resolve(call, e)

    @staticmethod
    def _resolve(call: PendingCall, outcome):
        if not call.complete(outcome):
            logger.debug("discarding result for cancelled call to %s" % call.address)
