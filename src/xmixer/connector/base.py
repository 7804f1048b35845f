from abc import abstractmethod

from xmixer.errors import NotConnectedError
from xmixer.support.events import EventSource


class ConnectorEvent:
    """ base class for connector events. """
    def __init__(self, connector):
        self.connector = connector


class ConnectorOpenedEvent(ConnectorEvent):
    """ The connector was opened. """


class ConnectorClosedEvent(ConnectorEvent):
    """ The connector was closed. """


class Connector:
    """ A connector describes an endpoint to which requests can be sent. """

    def __init__(self):
        self.events = EventSource()

    @property
    @abstractmethod
    def endpoint(self):
        """ the endpoint that this connector reaches out to """
        raise NotImplementedError

    @property
    @abstractmethod
    def is_open(self) -> bool:
        """
        Determines if this connector is open.
        :rtype: bool
        """
        raise NotImplementedError

    @abstractmethod
    def open(self):
        """
        Opens this connector. If the connector is already open, this method returns silently.
        """
        raise NotImplementedError

    @abstractmethod
    def close(self):
        """
        Closes this connector. If the connector is already closed, this method returns silently.
        """
        raise NotImplementedError


class AbstractConnector(Connector):
    """ Manages the open/close cycle of a connector and fires the corresponding events. """

    def __init__(self):
        super().__init__()
        self._state = None

    @property
    def is_open(self):
        return self._state is not None

    def open(self):
        if self.is_open:
            return
        self._state = self._open()
        self.events.fire(ConnectorOpenedEvent(self))

    def close(self):
        state = self._state
        if state is None:
            return
        self._state = None
        self._close(state)
        self.events.fire(ConnectorClosedEvent(self))

    @abstractmethod
    def _open(self):
        """ Template method for subclasses to open the connection.
            :return: the state of the open connection. Passed to _close().
            If the connection cannot be opened, an exception should be thrown, and any partly acquired
            resources released.
        """
        raise NotImplementedError

    @abstractmethod
    def _close(self, state):
        """ Template method for subclasses to release the state of the open connection.
        """
        raise NotImplementedError

    def __enter__(self):
        """ opens the connector on entry, and closes it on exit. """
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    @property
    def state(self):
        """
        Retrieves the state of the open connection.
        raises NotConnectedError if not open
        """
        state = self._state
        if state is None:
            raise NotConnectedError("connector to %s is not open" % (self.endpoint,))
        return state

