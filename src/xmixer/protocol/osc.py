"""
The OSC wire format: one message per datagram, an address followed by typed arguments.

Arguments are decoded at the boundary into a tagged union of wire values (Int32, Float32, String, Blob) so that
downstream code always asks for the kind it expects rather than coercing whatever arrived.
Serialization itself is delegated to python-osc.
"""
from pythonosc.osc_bundle import OscBundle
from pythonosc.osc_message import OscMessage, ParseError
from pythonosc.osc_message_builder import BuildError, OscMessageBuilder

from xmixer.errors import MalformedDatagramError, WireTypeError
from xmixer.support.mixins import CommonEqualityMixin

INT32_MIN = -2 ** 31
INT32_MAX = 2 ** 31 - 1


class WireValue(CommonEqualityMixin):
    """ A typed argument as carried on the wire. """
    tag = None

    def __init__(self, value):
        self.value = value

    def as_float(self) -> float:
        raise WireTypeError("expected a float, got %r" % self)

    def as_int(self) -> int:
        raise WireTypeError("expected an int, got %r" % self)

    def as_str(self) -> str:
        raise WireTypeError("expected a string, got %r" % self)

    def __repr__(self):
        return "%s(%r)" % (type(self).__name__, self.value)


class Int32(WireValue):
    tag = OscMessageBuilder.ARG_TYPE_INT

    def __init__(self, value: int):
        value = int(value)
        if not INT32_MIN <= value <= INT32_MAX:
            raise ValueError("%d does not fit in a 32-bit signed int" % value)
        super().__init__(value)

    def as_int(self):
        return self.value


class Float32(WireValue):
    tag = OscMessageBuilder.ARG_TYPE_FLOAT

    def __init__(self, value: float):
        super().__init__(float(value))

    def as_float(self):
        return self.value


class String(WireValue):
    tag = OscMessageBuilder.ARG_TYPE_STRING

    def __init__(self, value: str):
        super().__init__(str(value))

    def as_str(self):
        return self.value


class Blob(WireValue):
    """ opaque binary data, such as meter values. Carried but never decoded. """
    tag = OscMessageBuilder.ARG_TYPE_BLOB

    def __init__(self, value: bytes):
        super().__init__(bytes(value))


def to_wire(arg) -> WireValue:
    """
    Converts a python value to the corresponding wire value.
    bool is rejected since the on/off polarity depends on the parameter - use an OnOffCodec to encode it.
    """
    if isinstance(arg, WireValue):
        return arg
    if isinstance(arg, bool):
        raise TypeError("use an on/off codec to encode a bool, got %r" % arg)
    if isinstance(arg, int):
        return Int32(arg)
    if isinstance(arg, float):
        return Float32(arg)
    if isinstance(arg, str):
        return String(arg)
    if isinstance(arg, (bytes, bytearray)):
        return Blob(arg)
    raise TypeError("unsupported argument type %s: %r" % (type(arg).__name__, arg))


def from_wire(param) -> WireValue:
    """ Converts a parameter decoded by python-osc to a wire value. """
    if isinstance(param, bool):
        return Int32(1 if param else 0)
    if isinstance(param, int):
        # int64 and rgba arguments decode to ints that may not fit
        try:
            return Int32(param)
        except ValueError as e:
            raise MalformedDatagramError(str(e)) from e
    if isinstance(param, float):
        return Float32(param)
    if isinstance(param, str):
        return String(param)
    if isinstance(param, bytes):
        return Blob(param)
    raise MalformedDatagramError("unsupported argument type %s: %r" % (type(param).__name__, param))


class OutboundMessage(CommonEqualityMixin):
    """ A message sent to the mixer. A message without arguments reads the value at the address. """

    def __init__(self, address: str, args=()):
        if not address.startswith('/'):
            raise ValueError("address must start with '/': %r" % address)
        self.address = address
        self.args = tuple(to_wire(a) for a in args)

    @property
    def is_query(self):
        return not self.args

    def to_datagram(self) -> bytes:
        builder = OscMessageBuilder(address=self.address)
        for arg in self.args:
            builder.add_arg(arg.value, arg.tag)
        try:
            return builder.build().dgram
        except BuildError as e:
            raise ValueError("cannot encode %r: %s" % (self, e)) from e

    def __repr__(self):
        return "OutboundMessage(%r, %r)" % (self.address, self.args)


class InboundMessage(CommonEqualityMixin):
    """ A message received from the mixer. """

    def __init__(self, address: str, args=(), source=None):
        self.address = address
        self.args = tuple(args)
        self.source = source

    @property
    def first(self) -> WireValue:
        """ the first argument, or None when the message has no arguments. """
        return self.args[0] if self.args else None

    @classmethod
    def from_datagram(cls, dgram: bytes, source=None):
        """
        Decodes a single OSC message.
        :raises MalformedDatagramError: if the datagram is not a well-formed OSC message.
        """
        if OscBundle.dgram_is_bundle(dgram):
            raise MalformedDatagramError("OSC bundles are not supported")
        if not OscMessage.dgram_is_message(dgram):
            raise MalformedDatagramError("datagram of %d bytes is not an OSC message" % len(dgram))
        try:
            msg = OscMessage(dgram)
        except ParseError as e:
            raise MalformedDatagramError("cannot parse datagram of %d bytes: %s" % (len(dgram), e)) from e
        return cls(msg.address, (from_wire(p) for p in msg.params), source)

    def __repr__(self):
        return "InboundMessage(%r, %r)" % (self.address, self.args)
