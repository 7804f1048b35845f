"""
Provides building blocks for the asynchronous side of the protocol: values that arrive later, and a loop that
runs on a background thread.
"""
import logging
import threading
import time
from concurrent.futures import Future

logger = logging.getLogger(__name__)


class FutureValue(Future):
    """ describes a value that may have not yet been computed. Callers can check if the value has arrived, or chose to
        wait until the value has arrived.
        If an exception is encountered computing the value, it is set."""

    def _value_extractor(self, value):
        """
        The value extractor allows processing of the result to arrive at the
        value returned in `value`.
        :param value:
        :return:
        """
        return value

    def set_result_or_exception(self, value):
        """sets the result, or the exception when value is an exception"""
        if isinstance(value, BaseException):
            self.set_exception(value)
        else:
            self.set_result(value)

    def complete(self, value):
        """
        Completes this future unless the caller cancelled it. Must be called at most once.
        :return: True if the value was set, False if the future had been cancelled.
        """
        if not self.set_running_or_notify_cancel():
            return False
        self.set_result_or_exception(value)
        return True

    def value(self, timeout=None):
        """ allows the provider to set the result value but provide a different (derived) value to callers. """
        return self._value_extractor(self.result(timeout))


class AsyncLoop:
    """ Continually runs a given function on a background thread.
        Exceptions are logged and posted to a given handler
        The background thread is registered as a daemon.
    """

    def __init__(self, fn=None, args=(), name=None, log=logger):
        """
        :param fn the function to run
        :param args arguments to pass to fn
        :param name the name given to the background thread
        """
        self.fn = fn
        self.args = args
        self.name = name
        self.stop_event = threading.Event()
        self.background_thread = None
        self.logger = log

    def start(self):
        """
        Starts the background thread. Starting a loop that is already running has no effect.
        """
        if self.background_thread is None:
            self.stop_event.clear()
            t = threading.Thread(target=self._run, name=self.name, daemon=True)
            self.background_thread = t
            t.start()

    def exception_handler(self, e):
        self.logger.exception(e)

    def _run(self):
        """ The processing loop for the background thread.
             Invokes the callable for as long as the stop signal is not received.
        """
        self._do(self.startup)
        while self.running():
            self._do(self.loop)
        self._do(self.shutdown)
        logger.debug("background thread %s exiting" % self.name)

    def _do(self, callme):
        """ runs a function and captures any exceptions """
        try:
            callme()
        except Exception as e:
            time.sleep(0)
            self.exception_handler(e)

    def startup(self):
        """ template method called when the thread starts"""
        pass

    def loop(self):
        self.fn(*self.args)

    def shutdown(self):
        """ template method called when the thread exits """
        pass

    def running(self):
        return not self.stop_event.is_set()

    def stop(self):
        """ signals the loop to stop and waits for the background thread to exit, unless
            called from the background thread itself. """
        self.stop_event.set()
        thread = self.background_thread
        self.background_thread = None
        if thread and thread is not threading.current_thread():
            thread.join()
