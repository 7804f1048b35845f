import logging

from xmixer.conduit.udp_conduit import UDPConduitFactory
from xmixer.errors import MalformedDatagramError, NotConnectedError, TransportError
from xmixer.protocol.osc import InboundMessage, OutboundMessage
from xmixer.support.events import GuardedEventSource

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 0.05


class DatagramTransport:
    """
    Sends OSC messages to the mixer and hands every well-formed inbound message to a dispatch callable.

    Sending is fire-and-forget: there is no acknowledgement at this level. Malformed datagrams and socket errors
    are logged and do not interrupt the caller. Socket errors are also fired on the `errors` event source.

    :param host: the mixer host name or address
    :param port: the mixer OSC port
    :param dispatch: a callable that receives each InboundMessage
    :param conduit_factory: creates the conduit when the transport is opened
    :param poll_interval: the longest time receive() waits for a datagram
    """

    def __init__(self, host, port, dispatch, conduit_factory=None, poll_interval=DEFAULT_POLL_INTERVAL):
        self.host = host
        self.port = port
        self._dispatch = dispatch
        self._conduit_factory = conduit_factory or UDPConduitFactory()
        self.poll_interval = poll_interval
        self._conduit = None
        self.errors = GuardedEventSource()

    @property
    def endpoint(self):
        return self.host, self.port

    @property
    def is_open(self) -> bool:
        conduit = self._conduit
        return conduit is not None and conduit.open

    @property
    def conduit(self):
        return self._conduit

    def open(self):
        """ Binds the local socket. Opening an open transport has no effect. """
        if self._conduit is None:
            try:
                self._conduit = self._conduit_factory(self.endpoint, self.poll_interval)
            except OSError as e:
                raise TransportError("unable to open socket for %s:%s: %s" % (self.host, self.port, e)) from e

    def close(self):
        conduit = self._conduit
        self._conduit = None
        if conduit is not None:
            conduit.close()
            logger.info("closed socket for %s:%s" % self.endpoint)

    def send(self, message: OutboundMessage) -> bool:
        """
        Sends a message as a single datagram.
        :return: True if the datagram was handed to the socket, False if the socket reported an error.
        :raises NotConnectedError: if the transport is not open
        """
        conduit = self._checked_conduit()
        data = message.to_datagram()
        try:
            conduit.write(data)
        except OSError as e:
            self._report(TransportError("error sending %s: %s" % (message.address, e)), e)
            return False
        logger.debug("sent %r" % message)
        return True

    def receive(self):
        """
        Reads at most one datagram and dispatches it.
        :return: the dispatched InboundMessage, or None if nothing was dispatched.
        :raises NotConnectedError: if the transport is not open
        """
        conduit = self._checked_conduit()
        try:
            received = conduit.read()
        except OSError as e:
            if conduit.open:
                self._report(TransportError("error receiving: %s" % e), e)
            return None
        if received is None:
            return None
        data, source = received
        if source != conduit.target:
            logger.debug("ignoring datagram from %s" % (source,))
            return None
        try:
            message = InboundMessage.from_datagram(data, source)
        except MalformedDatagramError as e:
            logger.warning("dropped malformed datagram from %s: %s" % (source, e))
            return None
        logger.debug("received %r" % message)
        self._dispatch(message)
        return message

    def _checked_conduit(self):
        conduit = self._conduit
        if conduit is None or not conduit.open:
            raise NotConnectedError("transport to %s:%s is not open" % self.endpoint)
        return conduit

    def _report(self, error: TransportError, cause):
        error.__cause__ = cause
        logger.error(str(error))
        self.errors.fire(error)
