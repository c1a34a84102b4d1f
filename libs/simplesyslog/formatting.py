'''
Syslog line assembly.

    [ "<" PRIORITY ">" ] TIMESTAMP " " IDENTITY " " MESSAGE

https://www.ietf.org/rfc/rfc3164.txt
https://www.ietf.org/rfc/rfc5424.txt
'''
from datetime import datetime, timezone
from enum import Enum


class HeaderMode(Enum):
    NONE = 'none'
    RFC3164 = 'rfc3164'
    RFC5424 = 'rfc5424'


RFC3164_MAX_LINE_LENGTH = 1024
RFC5424_MAX_LINE_LENGTH = 2048

DEFAULT_MAX_LINE_LENGTHS = {
    HeaderMode.NONE:    0,
    HeaderMode.RFC3164: RFC3164_MAX_LINE_LENGTH,
    HeaderMode.RFC5424: RFC5424_MAX_LINE_LENGTH,
}

ELLIPSIS = b'...'

# strftime('%b') follows the locale, collectors expect english month names
MONTHS = ('Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun', 'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec')


def header_mode(value):
    if isinstance(value, HeaderMode):
        return value
    if value is None:
        return HeaderMode.NONE
    return HeaderMode(str(value).strip().lower().replace('-', '').replace('_', '') or 'none')

def stamp(now):
    ''' RFC 3164 TIMESTAMP, e.g. 'Jan  2 15:04:05'. The day is padded with a space, not a zero. '''
    return '{} {:>2} {:%H:%M:%S}'.format(MONTHS[now.month - 1], now.day, now)

def rfc3339(now):
    if now.tzinfo is None:
        now = now.astimezone()
    return now.astimezone(timezone.utc).strftime('%Y-%m-%dT%H:%M:%SZ')

def timestamp(mode, now = None):
    if mode is HeaderMode.RFC5424:
        return rfc3339(now or datetime.now(timezone.utc))
    return stamp(now or datetime.now())

def identity(hostname, local_address, hostname_only = False):
    if hostname_only:
        return hostname
    return '{}/{}'.format(hostname, local_address)

def build_header(
    hostname,
    local_address,
    priority,
    mode = HeaderMode.NONE,
    hostname_only = False,
    include_priority_prefix = True,
    now = None,
):
    '''
    Everything that goes in front of the message, without the separating space.
    Leave out the priority prefix when the transport or collector adds its own.
    '''
    header = '{} {}'.format(timestamp(mode, now), identity(hostname, local_address, hostname_only))
    if include_priority_prefix:
        header = '<{}>{}'.format(int(priority), header)
    return header

def encode(message):
    if isinstance(message, (bytes, bytearray, memoryview)):
        return bytes(message)
    return str(message).encode('utf-8')

def truncate(message, max_line_length):
    '''
    Cuts 'message' down to exactly 'max_line_length' bytes, the last three being '...'.
    Lengths are counted in bytes of the UTF-8 encoding, so a multi-byte character
    may be split in half. A limit of 3 or less disables truncation.
    '''
    data = encode(message)
    if max_line_length > len(ELLIPSIS) and len(data) > max_line_length:
        return data[:max_line_length - len(ELLIPSIS)] + ELLIPSIS
    return data

def effective_max_line_length(mode, max_line_length = 0):
    ''' An explicit limit overrides the one implied by the header mode. '''
    return max_line_length or DEFAULT_MAX_LINE_LENGTHS[mode]

def build_line(header, message):
    return header.encode('utf-8') + b' ' + message
