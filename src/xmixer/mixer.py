"""
The mixer in terms of application values.

Each method builds the address of a parameter, converts the value with the parameter's unit codec, and hands the
message to the connector. Setters are fire-and-forget. Getters wait for the mixer's reply and raise
ResponseTimeoutError or ConnectionClosedError rather than returning a default value.

Channel, bus, aux, matrix, DCA, effect and scene numbers are the ones shown on the console, starting at 1.
"""
from xmixer import codecs, paths
from xmixer.connector.mixer_connector import MixerConnector
from xmixer.errors import MixerError


class Mixer:
    """
    Usage::

        with MixerConnector('192.168.1.17') as connector:
            mixer = Mixer(connector)
            mixer.set_fader(1, 0.75)
            mixer.mute_channel(2, True)
            level = mixer.get_fader(1)
    """

    def __init__(self, connector: MixerConnector):
        self.connector = connector

    def _set(self, address, *args):
        self.connector.send(address, *args)

    def _get(self, address):
        return self.connector.request(address)

    def _get_float(self, address, codec=codecs.LEVEL):
        return codec.decode(self._get(address).as_float())

    def _get_int(self, address):
        return self._get(address).as_int()

    def _get_bool(self, address, codec=codecs.ON_OFF):
        return codec.decode(self._get(address).as_int())

    def _get_str(self, address):
        return self._get(address).as_str()

    def _set_float(self, address, value, codec=codecs.LEVEL):
        self._set(address, float(codec.encode(value)))

    def _set_bool(self, address, value, codec=codecs.ON_OFF):
        self._set(address, codec.encode(value))

    # channel

    def set_fader(self, channel, level):
        self._set_float(paths.channel(channel) + "/mix/fader", level)

    def get_fader(self, channel):
        return self._get_float(paths.channel(channel) + "/mix/fader")

    def mute_channel(self, channel, mute):
        self._set_bool(paths.channel(channel) + "/mix/on", mute, codecs.MUTE)

    def get_mute(self, channel):
        return self._get_bool(paths.channel(channel) + "/mix/on", codecs.MUTE)

    def set_pan(self, channel, pan):
        """ :param pan: -1.0 (left) to 1.0 (right) """
        self._set_float(paths.channel(channel) + "/mix/pan", pan, codecs.PAN)

    def get_pan(self, channel):
        return self._get_float(paths.channel(channel) + "/mix/pan", codecs.PAN)

    def set_channel_name(self, channel, name):
        self._set(paths.channel(channel) + "/config/name", str(name))

    def get_channel_name(self, channel):
        return self._get_str(paths.channel(channel) + "/config/name")

    def set_channel_color(self, channel, color):
        self._set(paths.channel(channel) + "/config/color", int(color))

    def set_solo(self, channel, solo):
        self._set_bool(paths.channel(channel) + "/mix/solo", solo)

    def get_solo(self, channel):
        return self._get_bool(paths.channel(channel) + "/mix/solo")

    def set_channel_source(self, channel, source):
        self._set(paths.channel(channel) + "/config/source", int(source))

    def get_channel_source(self, channel):
        return self._get_int(paths.channel(channel) + "/config/source")

    # equalizer

    def set_eq(self, channel, band, gain):
        """ :param gain: -15 to +15 dB """
        self._set_float(paths.channel(channel) + "/eq/%d/g" % band, gain, codecs.EQ_GAIN)

    def get_eq(self, channel, band):
        return self._get_float(paths.channel(channel) + "/eq/%d/g" % band, codecs.EQ_GAIN)

    def set_eq_frequency(self, channel, band, frequency):
        self._set_float(paths.channel(channel) + "/eq/%d/f" % band, frequency)

    def set_eq_q(self, channel, band, q):
        self._set_float(paths.channel(channel) + "/eq/%d/q" % band, q)

    def set_eq_type(self, channel, band, eq_type):
        self._set(paths.channel(channel) + "/eq/%d/type" % band, int(eq_type))

    def set_eq_on(self, channel, on):
        self._set_bool(paths.channel(channel) + "/eq/on", on)

    # gate

    def set_gate(self, channel, threshold):
        """ :param threshold: -80 to 0 dB """
        self._set_float(paths.channel(channel) + "/gate/thr", threshold, codecs.GATE_THRESHOLD)

    def get_gate(self, channel):
        return self._get_float(paths.channel(channel) + "/gate/thr", codecs.GATE_THRESHOLD)

    def set_gate_on(self, channel, on):
        self._set_bool(paths.channel(channel) + "/gate/on", on)

    def set_gate_range(self, channel, gate_range):
        self._set_float(paths.channel(channel) + "/gate/range", gate_range)

    def set_gate_attack(self, channel, attack):
        self._set_float(paths.channel(channel) + "/gate/attack", attack)

    def set_gate_hold(self, channel, hold):
        self._set_float(paths.channel(channel) + "/gate/hold", hold)

    def set_gate_release(self, channel, release):
        self._set_float(paths.channel(channel) + "/gate/release", release)

    # compressor

    def set_compressor(self, channel, threshold, ratio):
        """
        :param threshold: -60 to 0 dB
        :param ratio: 1 (1:1) to 20 (20:1)
        """
        self._set_float(paths.channel(channel) + "/dyn/thr", threshold, codecs.COMPRESSOR_THRESHOLD)
        self._set_float(paths.channel(channel) + "/dyn/ratio", ratio, codecs.COMPRESSOR_RATIO)

    def set_compressor_attack(self, channel, attack):
        self._set_float(paths.channel(channel) + "/dyn/attack", attack)

    def set_compressor_release(self, channel, release):
        self._set_float(paths.channel(channel) + "/dyn/release", release)

    def set_compressor_gain(self, channel, gain):
        self._set_float(paths.channel(channel) + "/dyn/gain", gain)

    def set_compressor_knee(self, channel, knee):
        self._set_float(paths.channel(channel) + "/dyn/knee", knee)

    def set_compressor_makeup_gain(self, channel, gain):
        self._set_float(paths.channel(channel) + "/dyn/mgain", gain)

    def set_compressor_detection(self, channel, detection):
        """ :param detection: 0 peak, 1 RMS """
        self._set(paths.channel(channel) + "/dyn/det", int(detection))

    def set_compressor_envelope(self, channel, envelope):
        """ :param envelope: 0 linear, 1 logarithmic """
        self._set(paths.channel(channel) + "/dyn/env", int(envelope))

    def set_compressor_on(self, channel, on):
        self._set_bool(paths.channel(channel) + "/dyn/on", on)

    # preamp and inserts

    def set_preamp_gain(self, channel, gain):
        self._set_float(paths.channel(channel) + "/preamp/trim", gain)

    def get_preamp_gain(self, channel):
        return self._get_float(paths.channel(channel) + "/preamp/trim")

    def set_high_pass_filter(self, channel, enabled):
        self._set_bool(paths.channel(channel) + "/preamp/hpon", enabled)

    def set_high_pass_filter_frequency(self, channel, frequency):
        self._set_float(paths.channel(channel) + "/preamp/hpf", frequency)

    def set_phantom_power(self, headamp, enabled):
        self._set_bool(paths.headamp(headamp) + "/phantom", enabled)

    def set_insert_on(self, channel, enabled):
        self._set_bool(paths.channel(channel) + "/insert/on", enabled)

    def set_insert_position(self, channel, position):
        self._set(paths.channel(channel) + "/insert/pos", int(position))

    def set_insert_selection(self, channel, selection):
        self._set(paths.channel(channel) + "/insert/sel", int(selection))

    # buses and auxes

    def set_bus_fader(self, bus, level):
        self._set_float(paths.bus(bus) + "/mix/fader", level)

    def get_bus_fader(self, bus):
        return self._get_float(paths.bus(bus) + "/mix/fader")

    def mute_bus(self, bus, mute):
        self._set_bool(paths.bus(bus) + "/mix/on", mute, codecs.MUTE)

    def set_bus_pan(self, bus, pan):
        self._set_float(paths.bus(bus) + "/mix/pan", pan, codecs.PAN)

    def set_bus_name(self, bus, name):
        self._set(paths.bus(bus) + "/config/name", str(name))

    def set_aux_fader(self, aux, level):
        self._set_float(paths.aux(aux) + "/mix/fader", level)

    def get_aux_fader(self, aux):
        return self._get_float(paths.aux(aux) + "/mix/fader")

    def mute_aux(self, aux, mute):
        self._set_bool(paths.aux(aux) + "/mix/on", mute, codecs.MUTE)

    def set_aux_pan(self, aux, pan):
        self._set_float(paths.aux(aux) + "/mix/pan", pan, codecs.PAN)

    # sends

    def send_to_bus(self, channel, bus, level):
        self._set_float(paths.mix_send(channel, bus), level)

    def get_send_to_bus(self, channel, bus):
        return self._get_float(paths.mix_send(channel, bus))

    def send_to_aux(self, channel, aux, level):
        self._set_float(paths.aux_send(channel, aux), level)

    def send_to_matrix(self, channel, matrix, level):
        self._set_float(paths.matrix_send(channel, matrix), level)

    def set_send_pre_post(self, channel, bus, pre):
        self._set_bool(paths.send_tap(channel, bus), pre)

    # main mix

    def set_main_fader(self, level):
        self._set_float(paths.MAIN_STEREO + "/mix/fader", level)

    def get_main_fader(self):
        return self._get_float(paths.MAIN_STEREO + "/mix/fader")

    def mute_main(self, mute):
        self._set_bool(paths.MAIN_STEREO + "/mix/on", mute, codecs.MUTE)

    def set_main_pan(self, pan):
        self._set_float(paths.MAIN_STEREO + "/mix/pan", pan, codecs.PAN)

    def set_main_mono_fader(self, level):
        self._set_float(paths.MAIN_MONO + "/mix/fader", level)

    def get_main_mono_fader(self):
        return self._get_float(paths.MAIN_MONO + "/mix/fader")

    def mute_main_mono(self, mute):
        self._set_bool(paths.MAIN_MONO + "/mix/on", mute, codecs.MUTE)

    # matrix

    def set_matrix_fader(self, matrix, level):
        self._set_float(paths.matrix(matrix) + "/mix/fader", level)

    def mute_matrix(self, matrix, mute):
        self._set_bool(paths.matrix(matrix) + "/mix/on", mute, codecs.MUTE)

    def set_matrix_name(self, matrix, name):
        self._set(paths.matrix(matrix) + "/config/name", str(name))

    def get_matrix_name(self, matrix):
        return self._get_str(paths.matrix(matrix) + "/config/name")

    # DCA groups

    def set_dca_on(self, dca, on):
        """ unlike the channel mutes, 1 means the DCA is on """
        self._set_bool(paths.dca(dca) + "/on", on)

    def set_dca_fader(self, dca, level):
        self._set_float(paths.dca(dca) + "/fader", level)

    def get_dca_fader(self, dca):
        return self._get_float(paths.dca(dca) + "/fader")

    def set_dca_name(self, dca, name):
        self._set(paths.dca(dca) + "/config/name", str(name))

    # effects

    def set_effect_on(self, effect, on):
        self._set_bool(paths.fx(effect) + "/on", on)

    def set_effect_mix(self, effect, mix):
        self._set_float(paths.fx(effect) + "/mix", mix)

    def set_effect_param(self, effect, param, value):
        self._set_float(paths.fx_param(effect, param), value)

    def set_effect_type(self, effect, effect_type):
        self._set(paths.fx(effect) + "/type", int(effect_type))

    def get_effect_type(self, effect):
        return self._get_int(paths.fx(effect) + "/type")

    # outputs

    def set_output_source(self, output_type, output, source):
        self._set(paths.output(output_type, output) + "/src", int(source))

    def set_output_position(self, output_type, output, position):
        """ :param position: 0 pre EQ, 1 post EQ, 2 pre fader, 3 post fader """
        self._set(paths.output(output_type, output) + "/pos", int(position))

    def set_output_delay(self, output_type, output, enabled):
        self._set_bool(paths.output(output_type, output) + "/delay/on", enabled)

    def set_output_delay_time(self, output_type, output, delay):
        self._set_float(paths.output(output_type, output) + "/delay/tim", delay)

    # scenes

    def recall_scene(self, scene):
        self._set(paths.SNAPSHOT_LOAD, int(scene) - 1)

    def save_scene(self, scene, name=None):
        self._set(paths.SNAPSHOT_STORE, int(scene) - 1)
        if name:
            self._set(paths.snapshot_name(int(scene) - 1), str(name))

    def get_scene_name(self, scene):
        return self._get_str(paths.snapshot_name(int(scene) - 1))

    # talkback and meters

    def set_talkback(self, enabled):
        self._set_bool(paths.TALKBACK, enabled)

    def get_talkback(self):
        return self._get_bool(paths.TALKBACK)

    def get_channel_meter(self, channel):
        """ the channel's fader level. Live meter values stream separately, see request_meters. """
        return self._get_float(paths.channel(channel) + "/mix/fader")

    def request_meters(self, meter_id, channel_meter_id=None, group_meter_id=None, priority=None):
        """ asks the mixer to stream a meter bank. The meter values arrive as unsolicited blobs. """
        args = [str(meter_id)]
        args.extend(int(a) for a in (channel_meter_id, group_meter_id, priority) if a is not None)
        self._set(paths.METERS, *args)

    # system

    def info(self):
        """ the mixer's server version, the first field of the /info reply """
        return self._get_str(paths.INFO)

    def enable_updates(self):
        """ asks the mixer to push parameter changes. The connector already does this once when it opens. """
        self._set(paths.XCONTROL)

    def status(self):
        """
        Summarizes the connection to the mixer. Errors are reported in the result rather than raised.
        """
        host, port = self.connector.endpoint
        try:
            info = self.info()
        except MixerError as e:
            return {'connected': False, 'host': host, 'port': port, 'error': str(e)}
        try:
            status = self._get_str(paths.STATUS)
        except MixerError:
            status = None
        return {'connected': True, 'host': host, 'port': port, 'info': info, 'status': status}

    def send_custom(self, address, value=None):
        """ sends any message. A list or tuple value is sent as multiple arguments. """
        if value is None:
            self._set(address)
        elif isinstance(value, (list, tuple)):
            self._set(address, *value)
        else:
            self._set(address, value)
