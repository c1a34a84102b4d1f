from os import environ

from . import exceptions
from .formatting import HeaderMode, header_mode as parse_header_mode


TRUE_VALUES = ('1', 'true', 'yes', 'on')
FALSE_VALUES = ('', '0', 'false', 'no', 'off')


def _flag(name, value):
    normalized = value.strip().lower()
    if normalized in TRUE_VALUES:
        return True
    if normalized in FALSE_VALUES:
        return False
    raise exceptions.ConfigurationError(name, value, 'expected one of {}'.format(', '.join(TRUE_VALUES + FALSE_VALUES[1:])))

def _bool(name, value):
    if isinstance(value, str):
        return _flag(name, value)
    return bool(value)

def _non_negative_int(name, value):
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise exceptions.ConfigurationError(name, value, 'not an integer') from None
    if number < 0:
        raise exceptions.ConfigurationError(name, value, 'must not be negative')
    return number


class SyslogOptions(object):
    '''
    Everything that changes how a client formats and writes messages.

    header_mode:            HeaderMode.NONE (legacy timestamp, no truncation), RFC3164 (legacy timestamp,
                            1024 bytes) or RFC5424 (RFC 3339 UTC timestamp, 2048 bytes). Defaults to NONE.
    max_line_length:        hard cap on the message length in bytes. 0 uses the header mode's limit.
    include_priority_prefix: emit the '<priority>' prefix. Defaults to True.
    hostname_only:          identify as 'hostname' instead of 'hostname/address'. Defaults to False.
    max_bytes:              stop sending once more than this many bytes went out. 0 means no limit.
    timeout:                seconds for connecting and writing, None blocks forever.
    ca_file:                CA bundle used to verify a TLS server, the system store when None.
    insecure_skip_verify:   accept any TLS server certificate. Never the default.
    '''

    def __init__(
        self,
        header_mode = HeaderMode.NONE,
        max_line_length = 0,
        include_priority_prefix = True,
        hostname_only = False,
        max_bytes = 0,
        timeout = None,
        ca_file = None,
        insecure_skip_verify = False,
    ):
        try:
            self.header_mode = parse_header_mode(header_mode)
        except ValueError:
            raise exceptions.ConfigurationError('header_mode', header_mode, 'expected one of none, rfc3164, rfc5424') from None
        self.max_line_length = _non_negative_int('max_line_length', max_line_length)
        self.max_bytes = _non_negative_int('max_bytes', max_bytes)
        self.include_priority_prefix = _bool('include_priority_prefix', include_priority_prefix)
        self.hostname_only = _bool('hostname_only', hostname_only)
        if timeout is not None:
            try:
                timeout = float(timeout)
            except (TypeError, ValueError):
                raise exceptions.ConfigurationError('timeout', timeout, 'not a number') from None
            if timeout <= 0:
                raise exceptions.ConfigurationError('timeout', timeout, 'must be positive')
        self.timeout = timeout
        self.ca_file = ca_file or None
        self.insecure_skip_verify = _bool('insecure_skip_verify', insecure_skip_verify)

    @classmethod
    def from_environ(cls, env = None):
        '''
        SYSLOG_HEADER_MODE, SYSLOG_MAX_LINE_LENGTH, SYSLOG_NO_PRIORITY, SYSLOG_HOSTNAME_ONLY,
        SYSLOG_MAX_BYTES, SYSLOG_TIMEOUT, SYSLOG_TLS_CA_FILE, SYSLOG_TLS_INSECURE
        '''
        env = environ if env is None else env
        kwargs = {}
        if 'SYSLOG_HEADER_MODE' in env:
            kwargs['header_mode'] = env['SYSLOG_HEADER_MODE']
        if 'SYSLOG_MAX_LINE_LENGTH' in env:
            kwargs['max_line_length'] = _non_negative_int('SYSLOG_MAX_LINE_LENGTH', env['SYSLOG_MAX_LINE_LENGTH'])
        if 'SYSLOG_NO_PRIORITY' in env:
            kwargs['include_priority_prefix'] = not _flag('SYSLOG_NO_PRIORITY', env['SYSLOG_NO_PRIORITY'])
        if 'SYSLOG_HOSTNAME_ONLY' in env:
            kwargs['hostname_only'] = _flag('SYSLOG_HOSTNAME_ONLY', env['SYSLOG_HOSTNAME_ONLY'])
        if 'SYSLOG_MAX_BYTES' in env:
            kwargs['max_bytes'] = _non_negative_int('SYSLOG_MAX_BYTES', env['SYSLOG_MAX_BYTES'])
        if env.get('SYSLOG_TIMEOUT'):
            kwargs['timeout'] = env['SYSLOG_TIMEOUT']
        if env.get('SYSLOG_TLS_CA_FILE'):
            kwargs['ca_file'] = env['SYSLOG_TLS_CA_FILE']
        if 'SYSLOG_TLS_INSECURE' in env:
            kwargs['insecure_skip_verify'] = _flag('SYSLOG_TLS_INSECURE', env['SYSLOG_TLS_INSECURE'])
        return cls(**kwargs)

    def as_dict(self):
        return {
            'header_mode': self.header_mode.value,
            'max_line_length': self.max_line_length,
            'include_priority_prefix': self.include_priority_prefix,
            'hostname_only': self.hostname_only,
            'max_bytes': self.max_bytes,
            'timeout': self.timeout,
            'ca_file': self.ca_file,
            'insecure_skip_verify': self.insecure_skip_verify,
        }

    def __eq__(self, other):
        if not isinstance(other, SyslogOptions):
            return NotImplemented
        return self.as_dict() == other.as_dict()

    def __repr__(self):
        return '{}({})'.format(
            self.__class__.__name__,
            ', '.join('{}={!r}'.format(key, value) for key, value in self.as_dict().items())
        )
