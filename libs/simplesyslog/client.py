import logging

from . import exceptions, formatting, priority, transport
from .options import SyslogOptions


LOGGER = logging.getLogger(__name__)


class BaseSyslogClient(object):
    '''
    Formatting and byte accounting shared by the blocking and the async client.
    A client owns its connection exclusively and is not safe for concurrent use:
    serialize access or use one client per worker.
    '''

    def __init__(self, connection, options = None, hostname = None, local_address = None):
        options = options or SyslogOptions()
        self.connection = connection
        self.hostname = transport.local_hostname() if hostname is None else hostname
        self.local_address = transport.local_address(connection) if local_address is None else local_address
        self.header_mode = options.header_mode
        self.hostname_only = options.hostname_only
        self.include_priority_prefix = options.include_priority_prefix
        self.max_line_length = options.max_line_length
        self.max_bytes = options.max_bytes
        self.timeout = options.timeout
        self.bytes_sent = 0

    @property
    def header_mode(self):
        return self._header_mode

    @header_mode.setter
    def header_mode(self, value):
        self._header_mode = formatting.header_mode(value)

    @property
    def closed(self):
        return self.connection is None

    def set_max_bytes(self, limit):
        ''' Sets the (approximate) maximum number of bytes to send, 0 disables the limit. '''
        if limit < 0:
            raise exceptions.ConfigurationError('max_bytes', limit, 'must not be negative')
        self.max_bytes = limit

    def _check_sendable(self):
        if self.connection is None:
            raise exceptions.ClientClosed()
        if self.max_bytes and self.bytes_sent > self.max_bytes:
            raise exceptions.BudgetExceeded(self.bytes_sent, self.max_bytes)

    def truncate(self, message):
        return formatting.truncate(
            message,
            formatting.effective_max_line_length(self.header_mode, self.max_line_length)
        )

    def format(self, message, priority_value = None, facility = None, severity = None, now = None):
        header = formatting.build_header(
            self.hostname,
            self.local_address,
            priority.resolve(priority_value, facility, severity),
            self.header_mode,
            self.hostname_only,
            self.include_priority_prefix,
            now,
        )
        return formatting.build_line(header, self.truncate(message))

    def __repr__(self):
        return '{}(hostname={!r}, local_address={!r}, header_mode={}, bytes_sent={}, closed={})'.format(
            self.__class__.__name__,
            self.hostname,
            self.local_address,
            self.header_mode.value,
            self.bytes_sent,
            self.closed,
        )


class SyslogClient(BaseSyslogClient):

    def send(self, message, priority = None, facility = None, severity = None):
        '''
        Sends a syslog message with a specified priority, returns the number of bytes written.
        Examples:
          - send('foo', LOG_LOCAL0|LOG_NOTICE)
          - send('bar', facility='daemon', severity='debug')
        '''
        self._check_sendable()
        return self._write(self.format(message, priority, facility, severity))

    def send_raw(self, message):
        ''' Sends a pre-formatted line as is, only truncation applies. '''
        self._check_sendable()
        return self._write(self.truncate(message))

    def _write(self, data):
        view = memoryview(data)
        written = 0
        try:
            while written < len(view):
                written += self.connection.send(view[written:])
        except OSError as exc:
            raise exceptions.WriteFailure(written, exc) from exc
        finally:
            self.bytes_sent += written
        return written

    def close(self):
        '''
        Closes the connection. Closing an already closed client does nothing.
        '''
        if self.connection is None:
            return
        LOGGER.debug('Closing connection to syslog server, %d bytes sent', self.bytes_sent)
        connection, self.connection = self.connection, None
        try:
            connection.close()
        except OSError as exc:
            raise exceptions.CloseError(exc) from exc

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()


def connect(kind, address, options = None, ssl_context = None):
    '''
    Opens a connection to a syslog server.
    Examples:
      - connect('udp', '172.0.0.1:514')
      - connect(Transport.TCP, ':514')
      - connect('tls', '172.0.0.1:6514', SyslogOptions(ca_file = '/etc/ssl/collector.pem'))
    '''
    options = options or SyslogOptions()
    kind = transport.transport(kind)
    if kind is transport.Transport.TLS and ssl_context is None:
        try:
            ssl_context = transport.create_ssl_context(options.ca_file, options.insecure_skip_verify)
        except OSError as exc:
            raise exceptions.TransportFailure(address, exc) from exc
    return SyslogClient(transport.dial(kind, address, ssl_context, options.timeout), options)
