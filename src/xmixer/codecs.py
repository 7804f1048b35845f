"""
Conversions between the units people work in (dB, pan position, on/off) and the values carried on the wire.

Most parameters travel as a float between 0.0 and 1.0, mapped linearly onto the parameter's range.
Switches travel as an int 1 or 0, but the polarity depends on the parameter: "mix/on" is 1 when the channel
is *not* muted, while "eq/on", "gate/on" and the like are 1 when the feature is enabled.

No clamping is performed. Values outside a codec's domain are converted all the same, and it is up to the caller to
validate the range.
"""
from abc import abstractmethod

from xmixer.support.mixins import CommonEqualityMixin, StringerMixin


class UnitCodec(CommonEqualityMixin, StringerMixin):
    """
    Knows how to convert a value to/from the on-wire representation.
    """

    @abstractmethod
    def encode(self, value):
        """ converts a value in human units to the wire value. """
        raise NotImplementedError()

    @abstractmethod
    def decode(self, wire):
        """ converts a wire value to human units. """
        raise NotImplementedError()


class IdentityCodec(UnitCodec):
    """
    An identity codec - the input is returned as the result regardless of type
    """

    def encode(self, value):
        return value

    def decode(self, wire):
        return wire


class LinearCodec(UnitCodec):
    """
    Maps the range [low, high] linearly onto the wire range [0.0, 1.0].
    """

    def __init__(self, low: float, high: float):
        if low == high:
            raise ValueError("range must not be empty")
        self.low = low
        self.high = high

    def encode(self, value: float) -> float:
        return (value - self.low) / (self.high - self.low)

    def decode(self, wire: float) -> float:
        return wire * (self.high - self.low) + self.low


class OnOffCodec(UnitCodec):
    """
    Maps a boolean to the wire int 1/0.
    :param inverted when True, True is sent as 0 - used for mutes, where the wire value means "on air".
    """

    def __init__(self, inverted=False):
        self.inverted = inverted

    def encode(self, value: bool) -> int:
        return 0 if bool(value) == self.inverted else 1

    def decode(self, wire: int) -> bool:
        return wire == (0 if self.inverted else 1)


LEVEL = IdentityCodec()
ON_OFF = OnOffCodec()
MUTE = OnOffCodec(inverted=True)
PAN = LinearCodec(-1.0, 1.0)
EQ_GAIN = LinearCodec(-15.0, 15.0)
GATE_THRESHOLD = LinearCodec(-80.0, 0.0)
COMPRESSOR_THRESHOLD = LinearCodec(-60.0, 0.0)
COMPRESSOR_RATIO = LinearCodec(1.0, 20.0)
