"""
Errors raised by the mixer connection.

Only NotConnectedError, ResponseTimeoutError and ConnectionClosedError reach the caller of a request.
MalformedDatagramError and TransportError are contained and logged by the transport.
"""


class MixerError(Exception):
    """ base class for all errors raised by this package. """


class NotConnectedError(MixerError):
    """ An operation was attempted before the connection was opened, or after it was closed. """


class ResponseTimeoutError(MixerError, TimeoutError):
    """ No reply arrived for an address within the response window. """

    def __init__(self, address, timeout=None):
        message = "timeout waiting for response from %s" % address
        if timeout is not None:
            message += " after %.3fs" % timeout
        super().__init__(message)
        self.address = address
        self.timeout = timeout


class ConnectionClosedError(MixerError):
    """ A pending call was invalidated because the connection was closed. """

    def __init__(self, address=None):
        super().__init__("connection closed while waiting for response from %s" % address
                         if address else "connection closed")
        self.address = address


class MalformedDatagramError(MixerError, ValueError):
    """ An inbound datagram could not be decoded as an OSC message. """


class TransportError(MixerError, IOError):
    """ A socket-level failure sending or receiving a datagram. """


class WireTypeError(MixerError, TypeError):
    """ A wire value was not of the kind requested. """
