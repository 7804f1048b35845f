import sys
import threading
import time
import unittest
from concurrent import futures
from unittest.mock import Mock, call, patch

import timeout_decorator
from hamcrest import assert_that, calling, equal_to, instance_of, is_, is_not, raises

from xmixer.protocol.background import AsyncLoop, FutureValue
from xmixer.support.mixins import CommonEqualityMixin


def debug_timeout(value):
    """
    Replaces the timeout value with a very large one if the tests are running under a debugger.
    This prevents the main thread from throwing an exception and exiting when the test times out
    due to a breakpoint.
    """
    return value if sys.gettrace() is None else 100000


def wait_until(predicate, interval=0.005):
    """ polls until the predicate holds. Use with a test timeout. """
    while not predicate():
        time.sleep(interval)


class NastyException(Exception, CommonEqualityMixin):
    """ really nasty """


class FutureValueTestCase(unittest.TestCase):

    def test_default_value_extractor_returns_value(self):
        f = FutureValue()
        f.set_result(123)
        assert_that(f.value(), equal_to(123))

    def test_can_set_value_extractor(self):
        f = FutureValue()
        f.set_result([1, 2, 3])
        f._value_extractor = lambda x: " ".join(map(lambda x: str(x), x))
        assert_that(f.value(), equal_to("1 2 3"))

    def test_set_result_or_exception_with_non_exception_sets_result(self):
        sut = FutureValue()
        sut.set_result_or_exception(1)
        self.assertEqual(sut.result(), 1)

    def test_set_result_or_exception_with_exception_raises_exception(self):
        sut = FutureValue()
        sut.set_result_or_exception(NastyException())
        assert_that(calling(sut.result), raises(NastyException))

    def test_complete_sets_value(self):
        sut = FutureValue()
        assert_that(sut.complete(5), is_(True))
        assert_that(sut.value(), is_(5))

    def test_complete_sets_exception(self):
        sut = FutureValue()
        assert_that(sut.complete(NastyException()), is_(True))
        assert_that(calling(sut.value), raises(NastyException))

    def test_complete_after_cancel_is_ignored(self):
        sut = FutureValue()
        sut.cancel()
        assert_that(sut.complete(5), is_(False))
        assert_that(sut.cancelled(), is_(True))

    def test_value_times_out(self):
        sut = FutureValue()
        assert_that(calling(sut.value).with_args(0.01), raises(futures.TimeoutError))


class AsyncLoopTest(unittest.TestCase):
    @timeout_decorator.timeout(debug_timeout(2))
    def test_real_thread(self):
        thread = None
        sut = None
        loop_thread = None

        def fn():
            nonlocal thread, loop_thread
            thread = threading.current_thread()
            loop_thread = sut.background_thread
        loop = Mock(side_effect=fn)
        sut = AsyncLoop(loop, name='test loop')
        sut.startup = Mock()
        sut.shutdown = Mock()
        sut.start()
        wait_until(lambda: loop.call_count)

        running = sut.running()
        assert_that(thread, is_not(None))
        assert_that(thread, is_(loop_thread))
        assert_that(thread.name, is_('test loop'))
        assert_that(running, is_(True))
        sut.stop()
        stopped = not sut.running()
        assert_that(stopped, is_(True))
        assert_that(sut.background_thread, is_(None))
        sut.shutdown.assert_called_once()
        sut.startup.assert_called_once()

    @timeout_decorator.timeout(debug_timeout(1))
    def test_run_invokes_startup_shutdown_around_loop(self):
        running = Mock(return_value=True)

        def fn():
            if running.call_count > 1:
                running.return_value = False

        loop = Mock(side_effect=fn)
        sut = AsyncLoop(loop)
        sut.shutdown = Mock()
        sut.startup = Mock()
        sut.running = running
        manager = Mock()
        manager.attach_mock(sut.startup, 'startup')
        manager.attach_mock(sut.shutdown, 'shutdown')
        manager.attach_mock(loop, 'loop')
        sut._run()
        self.assertEqual(manager.mock_calls, [call.startup(), call.loop(), call.loop(), call.shutdown()])

    @timeout_decorator.timeout(debug_timeout(1))
    def test_an_exception_does_not_stop_the_loop(self):
        running = Mock(return_value=True)

        def fn():
            if running.call_count == 10:
                running.return_value = False
            raise NastyException()

        loop = Mock(side_effect=fn)
        sut = AsyncLoop(loop)
        sut.running = running
        sut.exception_handler = Mock()
        sut._run()
        self.assertEqual(loop.call_count, 10)
        self.assertEqual(sut.exception_handler.call_count, 10)
        sut.exception_handler.assert_called_with(NastyException())

    def test_loop_passes_args(self):
        fn = Mock()
        sut = AsyncLoop(fn, (1, 'a'))
        sut.loop()
        fn.assert_called_once_with(1, 'a')

    @patch('threading.Thread')
    def test_starting_an_already_started_loop(self, thread):
        sut = AsyncLoop([])
        the_thread = Mock()
        thread.return_value = the_thread
        sut.start()
        thread.assert_called_once()
        assert_that(thread.call_args[1]['daemon'], is_(True))
        assert_that(sut.background_thread, is_(the_thread))
        assert_that(sut.stop_event, is_(instance_of(threading.Event)))
        the_thread.start.assert_called_once()
        thread.reset_mock()
        sut.start()
        thread.assert_not_called()

    def test_stop_when_not_started_is_harmless(self):
        sut = AsyncLoop()
        sut.stop()

    @timeout_decorator.timeout(debug_timeout(2))
    def test_thread_exception(self):
        expected = NastyException()
        exception = None

        def fn():
            raise expected

        def capture_exception(e):
            nonlocal exception
            exception = e

        sut = AsyncLoop(fn)
        sut.exception_handler = Mock(side_effect=capture_exception)
        sut.start()
        wait_until(lambda: sut.exception_handler.call_count)
        sut.stop()
        assert_that(exception, is_(expected))

    def test_default_exception_handler_logs_exception(self):
        sut = AsyncLoop(None)
        sut.logger = Mock()
        e = NastyException()
        sut.exception_handler(e)
        sut.logger.exception.assert_called_once_with(e)

    @timeout_decorator.timeout(debug_timeout(2))
    def test_calling_stop_on_loop(self):
        sut = None

        def stop():
            sut.stop()

        sut = AsyncLoop(stop)
        sut.start()
        wait_until(lambda: sut.background_thread is None)
        sut.stop()

    @timeout_decorator.timeout(debug_timeout(2))
    def test_can_restart_after_stop(self):
        fn = Mock()
        sut = AsyncLoop(fn)
        sut.start()
        wait_until(lambda: fn.call_count)
        sut.stop()
        fn.reset_mock()
        sut.start()
        wait_until(lambda: fn.call_count)
        assert_that(sut.running(), is_(True))
        sut.stop()


if __name__ == '__main__':  # pragma no cover
    unittest.main()
