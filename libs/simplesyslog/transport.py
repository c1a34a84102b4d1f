import logging
import socket
import ssl
from enum import Enum

from . import exceptions


LOGGER = logging.getLogger(__name__)

# used if the hostname / local ip could not be determined
DEFAULT_HOSTNAME = 'unknown'
DEFAULT_IP = ''


class Transport(Enum):
    UDP = 'udp'
    TCP = 'tcp'
    TLS = 'tls'

    @property
    def socket_type(self):
        return socket.SOCK_DGRAM if self is Transport.UDP else socket.SOCK_STREAM


def transport(value):
    '''
    Transport.UDP or 'udp', Transport.TCP or 'tcp', Transport.TLS or 'tls'.
    '''
    if isinstance(value, Transport):
        return value
    try:
        return Transport(value.strip().lower())
    except (AttributeError, ValueError):
        raise exceptions.UnknownTransport(value) from None

def parse_address(address):
    '''
    Examples:
      - parse_address('172.0.0.1:514') == ('172.0.0.1', 514)
      - parse_address(':514') == ('localhost', 514)
      - parse_address('[::1]:514') == ('::1', 514)
      - parse_address(('logserver', 514)) == ('logserver', 514)
    '''
    if isinstance(address, tuple):
        host, port = address[:2]
    else:
        host, separator, port = str(address).rpartition(':')
        if not separator:
            raise ValueError('missing port in address {!r}'.format(address))
        if host.startswith('[') and host.endswith(']'):
            host = host[1:-1]
        elif ':' in host:
            raise ValueError('IPv6 address must be enclosed in brackets: {!r}'.format(address))
    try:
        port = int(port)
    except (TypeError, ValueError):
        raise ValueError('invalid port in address {!r}'.format(address)) from None
    if not 0 < port < 65536:
        raise ValueError('port out of range in address {!r}'.format(address))
    return host or 'localhost', port

def create_ssl_context(ca_file = None, insecure_skip_verify = False):
    '''
    A client context verifying the server against 'ca_file' or the system CA store.
    'insecure_skip_verify' turns off hostname and certificate checks and has to be asked for.
    '''
    context = ssl.create_default_context(ssl.Purpose.SERVER_AUTH, cafile = ca_file)
    if insecure_skip_verify:
        LOGGER.warning('TLS certificate verification is disabled')
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    return context

def dial(kind, address, ssl_context = None, timeout = None):
    '''
    Returns a connected socket.
    UDP and TCP connect directly, TLS connects via TCP and performs the handshake with 'ssl_context'.
    '''
    kind = transport(kind)
    try:
        host, port = parse_address(address)
    except ValueError as exc:
        raise exceptions.TransportFailure(address, exc) from exc
    try:
        if kind is Transport.UDP:
            sock = _dial_udp(host, port, timeout)
        else:
            sock = socket.create_connection((host, port), timeout = timeout)
            if kind is Transport.TLS:
                try:
                    sock = (ssl_context or create_ssl_context()).wrap_socket(sock, server_hostname = host)
                except Exception:
                    sock.close()
                    raise
    except OSError as exc:
        raise exceptions.TransportFailure(address, exc) from exc
    LOGGER.debug('Connected to %s via %s', address, kind.value)
    return sock

def _dial_udp(host, port, timeout):
    error = None
    for family, type_, proto, _, sockaddr in socket.getaddrinfo(host, port, 0, socket.SOCK_DGRAM):
        sock = socket.socket(family, type_, proto)
        try:
            sock.settimeout(timeout)
            sock.connect(sockaddr)
            return sock
        except OSError as exc:
            error = exc
            sock.close()
    raise error or OSError('getaddrinfo returned no addresses for {}'.format(host))

def local_hostname():
    try:
        return socket.gethostname() or DEFAULT_HOSTNAME
    except OSError:
        return DEFAULT_HOSTNAME

def local_address(sock):
    ''' The ip of the bound local endpoint, without the port. '''
    try:
        sockname = sock.getsockname()
    except (OSError, AttributeError):
        return DEFAULT_IP
    if isinstance(sockname, tuple) and sockname:
        return str(sockname[0])
    return DEFAULT_IP
