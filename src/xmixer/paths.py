"""
OSC addresses of the mixer's parameters.

Indices are the ones shown on the console (channel 1 is "/ch/01"), zero-padded to the width the mixer expects.
"""

XCONTROL = "/xcontrol"
XREMOTE = "/xremote"
INFO = "/info"
STATUS = "/status"
METERS = "/meters"
TALKBACK = "/-stat/talk"
SNAPSHOT_LOAD = "/-snap/load"
SNAPSHOT_STORE = "/-snap/store"
MAIN_STEREO = "/main/st"
MAIN_MONO = "/main/m"

OUTPUT_TYPES = ("main", "aux", "p16", "aes", "rec")

# offsets of the aux and matrix sends among a channel's mix sends: /ch/NN/mix/BB/level
AUX_SEND_OFFSET = 15
MATRIX_SEND_OFFSET = 22


def _padded(index, width=2):
    return str(index).zfill(width)


def channel(index):
    """
    >>> channel(1)
    '/ch/01'
    """
    return "/ch/" + _padded(index)


def bus(index):
    return "/bus/" + _padded(index)


def aux(index):
    return "/aux/" + _padded(index)


def matrix(index):
    return "/mtx/" + _padded(index)


def dca(index):
    """
    >>> dca(3)
    '/dca/3'
    """
    return "/dca/" + str(index)


def headamp(index):
    """
    >>> headamp(5)
    '/headamp/005'
    """
    return "/headamp/" + _padded(index, 3)


def fx(index):
    return "/fx/" + _padded(index)


def fx_param(index, param):
    return fx(index) + "/par/" + _padded(param)


def mix_send(channel_index, send_index):
    """ the level of a channel's send to mix bus send_index.
    >>> mix_send(1, 4)
    '/ch/01/mix/04/level'
    """
    return channel(channel_index) + "/mix/" + _padded(send_index) + "/level"


def aux_send(channel_index, aux_index):
    return mix_send(channel_index, aux_index + AUX_SEND_OFFSET)


def matrix_send(channel_index, matrix_index):
    return mix_send(channel_index, matrix_index + MATRIX_SEND_OFFSET)


def send_tap(channel_index, send_index):
    """ selects whether the send is taken pre or post fader. """
    return channel(channel_index) + "/mix/" + _padded(send_index) + "/preamp"


def output(output_type, index):
    """
    >>> output('p16', 3)
    '/outputs/p16/03'
    """
    if output_type not in OUTPUT_TYPES:
        raise ValueError("output type must be one of %s, got %r" % (", ".join(OUTPUT_TYPES), output_type))
    return "/outputs/" + output_type + "/" + _padded(index)


def snapshot_name(snapshot_index):
    """ the name of a stored scene. snapshot_index is the mixer's zero-based index.
    >>> snapshot_name(0)
    '/-snap/000/name'
    """
    return "/-snap/" + _padded(snapshot_index, 3) + "/name"
