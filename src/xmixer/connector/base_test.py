import unittest
from unittest.mock import Mock

from hamcrest import assert_that, calling, instance_of, is_, raises

from xmixer.connector.base import AbstractConnector, ConnectorClosedEvent, ConnectorOpenedEvent
from xmixer.errors import NotConnectedError


class StubConnector(AbstractConnector):

    def __init__(self):
        super().__init__()
        self._open_state = Mock()
        self._close_state = Mock()

    @property
    def endpoint(self):
        return 'stub', 1

    def _open(self):
        return self._open_state()

    def _close(self, state):
        self._close_state(state)


class AbstractConnectorTest(unittest.TestCase):

    def setUp(self):
        self.sut = StubConnector()
        self.listener = Mock()
        self.sut.events.add(self.listener)

    def test_initially_closed(self):
        assert_that(self.sut.is_open, is_(False))
        assert_that(calling(lambda: self.sut.state), raises(NotConnectedError, "stub"))

    def test_open(self):
        self.sut.open()
        assert_that(self.sut.is_open, is_(True))
        assert_that(self.sut.state, is_(self.sut._open_state.return_value))
        event = self.listener.call_args[0][0]
        assert_that(event, is_(instance_of(ConnectorOpenedEvent)))
        assert_that(event.connector, is_(self.sut))

    def test_open_twice_opens_once(self):
        self.sut.open()
        self.sut.open()
        self.sut._open_state.assert_called_once()
        self.listener.assert_called_once()

    def test_failed_open_stays_closed(self):
        self.sut._open_state.side_effect = OSError("no route")
        assert_that(calling(self.sut.open), raises(OSError))
        assert_that(self.sut.is_open, is_(False))
        self.listener.assert_not_called()

    def test_close_releases_state(self):
        self.sut.open()
        state = self.sut.state
        self.sut.close()
        self.sut._close_state.assert_called_once_with(state)
        assert_that(self.sut.is_open, is_(False))
        assert_that(self.listener.call_args[0][0], is_(instance_of(ConnectorClosedEvent)))

    def test_close_is_idempotent(self):
        self.sut.open()
        self.sut.close()
        self.sut.close()
        self.sut._close_state.assert_called_once()

    def test_close_when_never_opened(self):
        self.sut.close()
        self.sut._close_state.assert_not_called()
        self.listener.assert_not_called()

    def test_context_manager(self):
        with self.sut as connector:
            assert_that(connector, is_(self.sut))
            assert_that(connector.is_open, is_(True))
        assert_that(self.sut.is_open, is_(False))


if __name__ == '__main__':  # pragma no cover
    unittest.main()
