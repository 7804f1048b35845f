import logging
import socket

from xmixer.conduit.base import Conduit, ConduitFactory

logger = logging.getLogger(__name__)

# large enough for any reply from the mixer, including meter blobs
MAX_DATAGRAM_SIZE = 65536


class UDPConduit(Conduit):
    """
    A conduit that exchanges datagrams via a UDP socket.
    :param sock The bound socket
    :param remote The (host, port) the datagrams are written to
    """
    def __init__(self, sock: socket.socket, remote):
        self.sock = sock
        self.remote = remote
        self._open = True

    @property
    def open(self) -> bool:
        return self._open and self.sock.fileno() >= 0

    @property
    def target(self):
        return self.remote

    @property
    def local_address(self):
        return self.sock.getsockname()

    def read(self):
        try:
            data, source = self.sock.recvfrom(MAX_DATAGRAM_SIZE)
        except (socket.timeout, BlockingIOError):
            return None
        return data, source

    def write(self, data: bytes):
        self.sock.sendto(data, self.remote)

    def close(self):
        self._open = False
        self.sock.close()


class UDPConduitFactory(ConduitFactory):
    """
    Creates UDP conduits bound to a local port chosen by the operating system, since the mixer
    sends its replies and pushed updates to whichever port the request came from.
    """
    def __init__(self, local_host='', local_port=0):
        self.local = (local_host, local_port)

    def __call__(self, remote, poll_interval=None):
        """
        :param remote the (host, port) of the mixer
        :param poll_interval how long read() waits for a datagram before returning None. None waits forever.
        """
        host, port = remote
        remote_address = (socket.gethostbyname(host), port)
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            sock.bind(self.local)
            sock.settimeout(poll_interval)
        except socket.error:
            sock.close()
            raise
        logger.info("bound UDP socket %s for %s:%d" % (sock.getsockname(), host, port))
        return UDPConduit(sock, remote_address)
