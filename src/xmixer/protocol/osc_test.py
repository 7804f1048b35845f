import unittest

from hamcrest import assert_that, calling, contains_exactly, equal_to, is_, is_not, none, raises
from pythonosc.osc_bundle_builder import IMMEDIATELY, OscBundleBuilder
from pythonosc.osc_message_builder import OscMessageBuilder

from xmixer.errors import MalformedDatagramError, WireTypeError
from xmixer.protocol.osc import Blob, Float32, InboundMessage, Int32, OutboundMessage, String, from_wire, to_wire


def dgram(address, *args):
    builder = OscMessageBuilder(address=address)
    for arg in args:
        builder.add_arg(arg)
    return builder.build().dgram


class WireValueTest(unittest.TestCase):

    def test_float_accessor(self):
        assert_that(Float32(0.5).as_float(), is_(0.5))
        assert_that(calling(Float32(0.5).as_int), raises(WireTypeError))
        assert_that(calling(Float32(0.5).as_str), raises(WireTypeError, "expected a string, got Float32"))

    def test_int_accessor(self):
        assert_that(Int32(1).as_int(), is_(1))
        assert_that(calling(Int32(1).as_float), raises(WireTypeError, "expected a float, got Int32\\(1\\)"))

    def test_string_accessor(self):
        assert_that(String('V2.07').as_str(), is_('V2.07'))
        assert_that(calling(String('1').as_int), raises(WireTypeError))

    def test_blob_has_no_accessor(self):
        blob = Blob(b'\x01\x02')
        assert_that(blob.value, is_(b'\x01\x02'))
        assert_that(calling(blob.as_float), raises(WireTypeError))

    def test_int32_range(self):
        assert_that(Int32(2 ** 31 - 1).value, is_(2 ** 31 - 1))
        assert_that(Int32(-2 ** 31).value, is_(-2 ** 31))
        assert_that(calling(Int32).with_args(2 ** 31), raises(ValueError))
        assert_that(calling(Int32).with_args(-2 ** 31 - 1), raises(ValueError))

    def test_equality_is_by_kind_and_value(self):
        assert_that(Int32(1), equal_to(Int32(1)))
        assert_that(Int32(1), is_not(equal_to(Float32(1.0))))
        assert_that(Float32(0.25), is_not(equal_to(Float32(0.5))))

    def test_repr(self):
        assert_that(repr(String('a')), is_("String('a')"))


class ToWireTest(unittest.TestCase):

    def test_python_types(self):
        assert_that(to_wire(1), is_(equal_to(Int32(1))))
        assert_that(to_wire(0.75), is_(equal_to(Float32(0.75))))
        assert_that(to_wire('name'), is_(equal_to(String('name'))))
        assert_that(to_wire(b'ab'), is_(equal_to(Blob(b'ab'))))

    def test_wire_value_is_passed_through(self):
        value = Float32(1)
        assert_that(to_wire(value), is_(value))

    def test_bool_is_rejected(self):
        assert_that(calling(to_wire).with_args(True), raises(TypeError, "on/off codec"))

    def test_unsupported_type_is_rejected(self):
        assert_that(calling(to_wire).with_args(None), raises(TypeError))
        assert_that(calling(to_wire).with_args([1]), raises(TypeError))

    def test_from_wire_bool_is_int(self):
        assert_that(from_wire(True), is_(equal_to(Int32(1))))
        assert_that(from_wire(False), is_(equal_to(Int32(0))))

    def test_from_wire_out_of_range_int(self):
        assert_that(calling(from_wire).with_args(2 ** 40), raises(MalformedDatagramError, "32-bit"))

    def test_from_wire_unsupported(self):
        assert_that(calling(from_wire).with_args(None), raises(MalformedDatagramError))


class OutboundMessageTest(unittest.TestCase):

    def test_address_must_be_absolute(self):
        assert_that(calling(OutboundMessage).with_args('ch/01/mix/fader'), raises(ValueError))

    def test_query_has_no_args(self):
        assert_that(OutboundMessage('/info').is_query, is_(True))
        assert_that(OutboundMessage('/ch/01/mix/fader', (0.5,)).is_query, is_(False))

    def test_float_datagram(self):
        sut = OutboundMessage('/ch/01/mix/fader', (0.75,))
        assert_that(sut.to_datagram(), is_(b'/ch/01/mix/fader\x00\x00\x00\x00,f\x00\x00?@\x00\x00'))

    def test_query_datagram(self):
        assert_that(OutboundMessage('/info').to_datagram(), is_(b'/info\x00\x00\x00,\x00\x00\x00'))

    def test_int_is_sent_as_int(self):
        sut = OutboundMessage('/ch/01/mix/on', (0,))
        assert_that(sut.to_datagram(), is_(dgram('/ch/01/mix/on', 0)))

    def test_mixed_args(self):
        sut = OutboundMessage('/meters', ('/meters/1', 3))
        decoded = InboundMessage.from_datagram(sut.to_datagram())
        assert_that(decoded.args, contains_exactly(String('/meters/1'), Int32(3)))

    def test_equality(self):
        assert_that(OutboundMessage('/a', (1,)), equal_to(OutboundMessage('/a', (1,))))
        assert_that(OutboundMessage('/a', (1,)), is_not(equal_to(OutboundMessage('/a', (1.0,)))))


class InboundMessageTest(unittest.TestCase):

    def test_decode_float_reply(self):
        sut = InboundMessage.from_datagram(dgram('/ch/01/mix/fader', 0.5), ('10.0.0.2', 10023))
        assert_that(sut.address, is_('/ch/01/mix/fader'))
        assert_that(sut.first, is_(equal_to(Float32(0.5))))
        assert_that(sut.source, is_(('10.0.0.2', 10023)))

    def test_decode_info_reply(self):
        sut = InboundMessage.from_datagram(dgram('/info', 'V2.07', 'osc-server', 'X32', '4.06'))
        assert_that(sut.first.as_str(), is_('V2.07'))
        assert_that(len(sut.args), is_(4))

    def test_decode_blob(self):
        sut = InboundMessage.from_datagram(dgram('/meters/1', b'\x00\x01\x02\x03'))
        assert_that(sut.first, is_(equal_to(Blob(b'\x00\x01\x02\x03'))))

    def test_no_args(self):
        sut = InboundMessage.from_datagram(dgram('/xremote'))
        assert_that(sut.args, is_(()))
        assert_that(sut.first, is_(none()))

    def test_garbage_is_malformed(self):
        assert_that(calling(InboundMessage.from_datagram).with_args(b'\xff\xfe\x00'),
                    raises(MalformedDatagramError, "not an OSC message"))

    def test_truncated_is_malformed(self):
        data = dgram('/ch/01/mix/fader', 0.5)
        assert_that(calling(InboundMessage.from_datagram).with_args(data[:10]), raises(MalformedDatagramError))

    def test_bundle_is_malformed(self):
        builder = OscBundleBuilder(IMMEDIATELY)
        builder.add_content(OscMessageBuilder(address='/info').build())
        data = builder.build().dgram
        assert_that(calling(InboundMessage.from_datagram).with_args(data), raises(MalformedDatagramError, "bundles"))


if __name__ == '__main__':  # pragma no cover
    unittest.main()
