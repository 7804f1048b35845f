"""


Mixer Connections

- Conduit: a datagram socket bound to one remote endpoint. Reads return the datagram and the address it came from.
- Transport: encodes OSC messages onto the conduit, decodes inbound datagrams, and drops anything
  that is malformed or did not come from the mixer.
- Correlator: pairs each reply with the request that caused it, by address. Requests for an address that
  already has a request in flight wait their turn, so a reply is never handed to the wrong caller.
- Session keeper: the mixer only pushes parameter updates to clients that have sent /xremote recently.
  The keeper sends /xcontrol once on connect, then renews /xremote every 9 seconds until the connection closes.
- Connector: binds a transport, correlator and keeper to one mixer endpoint, with an open/close lifecycle.
- Mixer: set/get methods in application units (dB, pan position, mute) on top of the connector.
- Codecs: the conversions between application units and the 0.0-1.0 wire values.


More rough notes:

Messages that are not replies (updates pushed by the mixer, meter blobs) are fired on the connector's
`unsolicited` event source. Handlers run on the background thread, so they should not block.

Replies carry the same address as the request. The mixer sends no request ids, so two requests for
the same address cannot be told apart - hence the queue per address.


## Threading

Each open connector runs one background thread. It reads a datagram (waiting at most the poll interval),
expires any requests whose deadline has passed, and sends the keep-alive when it is due.
So timeouts and renewals are only as precise as the poll interval.

Requests can be issued from any thread. The caller blocks on the PendingCall (a Future) until the
background thread completes it.

Closing the connector stops the keep-alive first, then fails every pending request with
ConnectionClosedError, then joins the thread and closes the socket. Nothing is sent after close() returns.

"""
