import logging
import time

from xmixer.connector.base import AbstractConnector
from xmixer.protocol.background import AsyncLoop
from xmixer.protocol.correlator import DEFAULT_RESPONSE_TIMEOUT, PendingCall, ResponseCorrelator
from xmixer.protocol.osc import InboundMessage, OutboundMessage, WireValue
from xmixer.protocol.session import DEFAULT_KEEPALIVE_PERIOD, SessionKeeper
from xmixer.protocol.transport import DEFAULT_POLL_INTERVAL, DatagramTransport
from xmixer.support.events import GuardedEventSource

logger = logging.getLogger(__name__)

DEFAULT_PORT = 10023


class MixerConnection:
    """
    The state of one open connection: the transport, the table of pending calls, the session keeper and the
    background loop that drives them. A new instance is created each time the connector is opened.
    """

    def __init__(self, connector):
        self.transport = DatagramTransport(connector.host, connector.port, self._dispatch,
                                           connector.conduit_factory, connector.poll_interval)
        self.correlator = ResponseCorrelator(self.transport.send, connector.response_timeout, connector.clock)
        self.keeper = SessionKeeper(self.transport.send, connector.keepalive_period, connector.clock)
        self.loop = AsyncLoop(self.pump, name="xmixer %s:%s" % connector.endpoint)
        self.unsolicited = connector.unsolicited
        self.transport.errors.add(connector.errors.fire)

    def _dispatch(self, message: InboundMessage):
        if not self.correlator.match(message):
            self.unsolicited.fire(message)

    def pump(self):
        """ one turn of the background loop. """
        self.transport.receive()
        self.correlator.expire()
        self.keeper.tick()

    def start(self):
        self.transport.open()
        try:
            self.keeper.start()
            self.loop.start()
        except Exception:
            self.stop()
            raise

    def stop(self):
        """ stops the session renewals, fails the pending calls, and then releases the socket. """
        self.keeper.cancel()
        self.correlator.close()
        self.loop.stop()
        self.transport.close()


class MixerConnector(AbstractConnector):
    """
    A connection to a mixer's OSC port.

    Messages are sent with send() (no reply expected) or issue()/request() (the reply is awaited).
    Messages from the mixer that do not answer a request, such as the updates pushed while the session is
    active, are fired on `unsolicited`. Socket errors are fired on `errors`.

    :param host: the mixer's host name or IP address
    :param port: the mixer's OSC port
    :param response_timeout: how long a request waits for the reply, in seconds
    :param keepalive_period: how often the subscription to updates is renewed, in seconds
    :param poll_interval: the granularity of timeouts and renewals, in seconds
    """

    def __init__(self, host, port=DEFAULT_PORT, response_timeout=DEFAULT_RESPONSE_TIMEOUT,
                 keepalive_period=DEFAULT_KEEPALIVE_PERIOD, poll_interval=DEFAULT_POLL_INTERVAL,
                 conduit_factory=None, clock=time.monotonic):
        super().__init__()
        self.host = host
        self.port = port
        self.response_timeout = response_timeout
        self.keepalive_period = keepalive_period
        self.poll_interval = poll_interval
        self.conduit_factory = conduit_factory
        self.clock = clock
        self.unsolicited = GuardedEventSource()
        self.errors = GuardedEventSource()

    @classmethod
    def from_config(cls, config, **kwargs):
        """
        Creates a connector from the validated [connection] configuration section.
        """
        if not config.get('host'):
            raise ValueError("the mixer host is not configured")
        return cls(config['host'], port=config['port'], response_timeout=config['response_timeout'],
                   keepalive_period=config['keepalive_period'], poll_interval=config['poll_interval'], **kwargs)

    @property
    def endpoint(self):
        return self.host, self.port

    @property
    def local_address(self):
        """ the local (host, port) the mixer replies to. """
        return self.state.transport.conduit.local_address

    def _open(self):
        connection = MixerConnection(self)
        connection.start()
        logger.info("connected to mixer at %s:%s" % self.endpoint)
        return connection

    def _close(self, connection: MixerConnection):
        connection.stop()
        logger.info("disconnected from mixer at %s:%s" % self.endpoint)

    def send(self, address, *args) -> bool:
        """
        Sends a message without waiting for a reply.
        :return: False if the socket reported an error
        :raises NotConnectedError: if the connector is not open
        """
        return self.state.transport.send(OutboundMessage(address, args))

    def issue(self, address, *args) -> PendingCall:
        """
        Sends a message and returns the call that receives the reply.
        :raises NotConnectedError: if the connector is not open
        """
        return self.state.correlator.issue(OutboundMessage(address, args))

    def request(self, address, *args) -> WireValue:
        """
        Sends a message and waits for the reply.
        :return: the first argument of the reply
        :raises ResponseTimeoutError: if no reply arrives in time
        :raises ConnectionClosedError: if the connector is closed while waiting
        """
        return self.issue(address, *args).value()
