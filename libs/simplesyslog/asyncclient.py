import logging

from curio import (
    open_connection,
    socket as curiosocket,
    TaskTimeout,
    timeout_after,
)

from . import exceptions, transport
from .client import BaseSyslogClient
from .options import SyslogOptions


LOGGER = logging.getLogger(__name__)


async def _dial_udp(host, port):
    error = None
    for family, type_, proto, _, sockaddr in await curiosocket.getaddrinfo(host, port, 0, curiosocket.SOCK_DGRAM):
        sock = curiosocket.socket(family, type_, proto)
        try:
            await sock.connect(sockaddr)
            return sock
        except OSError as exc:
            error = exc
            await sock.close()
        except BaseException:
            await sock.close()
            raise
    raise error or OSError('getaddrinfo returned no addresses for {}'.format(host))

async def dial(kind, address, ssl_context = None):
    kind = transport.transport(kind)
    try:
        host, port = transport.parse_address(address)
    except ValueError as exc:
        raise exceptions.TransportFailure(address, exc) from exc
    try:
        if kind is transport.Transport.UDP:
            sock = await _dial_udp(host, port)
        elif kind is transport.Transport.TLS:
            sock = await open_connection(
                host,
                port,
                ssl = ssl_context or transport.create_ssl_context(),
                server_hostname = host,
            )
        else:
            sock = await open_connection(host, port)
    except OSError as exc:
        raise exceptions.TransportFailure(address, exc) from exc
    LOGGER.debug('Connected to %s via %s', address, kind.value)
    return sock


class AsyncSyslogClient(BaseSyslogClient):
    '''
    Same as SyslogClient, for use inside a curio kernel.
    '''

    async def send(self, message, priority = None, facility = None, severity = None):
        self._check_sendable()
        return await self._write(self.format(message, priority, facility, severity))

    async def send_raw(self, message):
        self._check_sendable()
        return await self._write(self.truncate(message))

    async def _write(self, data):
        view = memoryview(data)
        written = 0
        try:
            while written < len(view):
                if self.timeout:
                    written += await timeout_after(self.timeout, self.connection.send(view[written:]))
                else:
                    written += await self.connection.send(view[written:])
        except (OSError, TaskTimeout) as exc:
            raise exceptions.WriteFailure(written, exc) from exc
        finally:
            self.bytes_sent += written
        return written

    async def close(self):
        if self.connection is None:
            return
        LOGGER.debug('Closing connection to syslog server, %d bytes sent', self.bytes_sent)
        connection, self.connection = self.connection, None
        try:
            await connection.close()
        except OSError as exc:
            raise exceptions.CloseError(exc) from exc

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_value, traceback):
        await self.close()


async def connect(kind, address, options = None, ssl_context = None):
    '''
    Examples:
      - await connect('udp', '172.0.0.1:514')
      - async with await connect('tcp', 'logserver:514') as client: ...
    '''
    options = options or SyslogOptions()
    kind = transport.transport(kind)
    if kind is transport.Transport.TLS and ssl_context is None:
        try:
            ssl_context = transport.create_ssl_context(options.ca_file, options.insecure_skip_verify)
        except OSError as exc:
            raise exceptions.TransportFailure(address, exc) from exc
    if options.timeout:
        try:
            connection = await timeout_after(options.timeout, dial(kind, address, ssl_context))
        except TaskTimeout as exc:
            raise exceptions.TransportFailure(address, exc) from exc
    else:
        connection = await dial(kind, address, ssl_context)
    return AsyncSyslogClient(connection, options)
