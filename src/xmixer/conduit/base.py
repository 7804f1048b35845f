from abc import abstractmethod


class Conduit:
    """
    A conduit carries discrete datagrams in both directions between this client and a single remote endpoint.
    """

    @property
    @abstractmethod
    def target(self):
        """ the remote endpoint the conduit writes to. """
        raise NotImplementedError

    @property
    @abstractmethod
    def local_address(self):
        """ the local endpoint replies are sent to. """
        raise NotImplementedError

    @property
    @abstractmethod
    def open(self) -> bool:
        """ determines if this conduit is open. When open, datagrams can be read and written. """
        raise NotImplementedError

    @abstractmethod
    def read(self):
        """ reads the next datagram.
            :return: a tuple (data, source), or None if no datagram arrived within the conduit's poll interval.
        """
        raise NotImplementedError

    @abstractmethod
    def write(self, data: bytes):
        """ writes one datagram to the target. """
        raise NotImplementedError

    @abstractmethod
    def close(self):
        raise NotImplementedError


class ConduitFactory:
    """
    A factory knows how to create a conduit given appropriate construction arguments.
    """
    @abstractmethod
    def __call__(self, *args, **kwargs):
        """
        Constructs the conduit from the given construction arguments.
        Note that no tests are done that the resource is available or not.
        """
        raise NotImplementedError()
