'''
Syslog facilities and severities.
See https://www.ietf.org/rfc/rfc3164.txt (4.1.1 PRI Part)
'''
from enum import IntEnum

from frozendict import frozendict

from . import exceptions


class Severity(IntEnum):
    EMERGENCY = 0
    ALERT = 1
    CRITICAL = 2
    ERROR = 3
    WARNING = 4
    NOTICE = 5
    INFO = 6
    DEBUG = 7


class Facility(IntEnum):
    KERNEL = 0
    USER = 1
    MAIL = 2
    SYSTEM = 3
    SECURITY = 4
    MESSAGES = 5
    PRINTER = 6
    NEWS = 7
    UUCP = 8
    CLOCK = 9
    AUTH = 10
    FTP = 11
    NTP = 12
    AUDIT = 13
    LOG = 14
    CRON = 15
    LOCAL0 = 16
    LOCAL1 = 17
    LOCAL2 = 18
    LOCAL3 = 19
    LOCAL4 = 20
    LOCAL5 = 21
    LOCAL6 = 22
    LOCAL7 = 23


SEVERITIES = frozendict({ severity.name.lower(): severity for severity in Severity })

FACILITY_ALIASES = {
    'user-level':   Facility.USER,
    'kern':         Facility.KERNEL,
    'daemon':       Facility.SYSTEM,
    'syslog':       Facility.MESSAGES,
    'lpr':          Facility.PRINTER,
    'authpriv':     Facility.AUTH,
}

FACILITIES = frozendict({
    **{ facility.name.lower(): facility for facility in Facility },
    **FACILITY_ALIASES,
})

# same values as the platform <syslog.h> constants, facilities already shifted
LOG_EMERG = int(Severity.EMERGENCY)
LOG_ALERT = int(Severity.ALERT)
LOG_CRIT = int(Severity.CRITICAL)
LOG_ERR = int(Severity.ERROR)
LOG_WARNING = int(Severity.WARNING)
LOG_NOTICE = int(Severity.NOTICE)
LOG_INFO = int(Severity.INFO)
LOG_DEBUG = int(Severity.DEBUG)

LOG_KERN = 0 << 3
LOG_USER = 1 << 3
LOG_MAIL = 2 << 3
LOG_DAEMON = 3 << 3
LOG_AUTH = 4 << 3
LOG_SYSLOG = 5 << 3
LOG_LPR = 6 << 3
LOG_NEWS = 7 << 3
LOG_UUCP = 8 << 3
LOG_CRON = 9 << 3
LOG_AUTHPRIV = 10 << 3
LOG_FTP = 11 << 3
LOG_LOCAL0 = 16 << 3
LOG_LOCAL1 = 17 << 3
LOG_LOCAL2 = 18 << 3
LOG_LOCAL3 = 19 << 3
LOG_LOCAL4 = 20 << 3
LOG_LOCAL5 = 21 << 3
LOG_LOCAL6 = 22 << 3
LOG_LOCAL7 = 23 << 3

SEVERITY_MASK = 0x07


def _lookup(value, enum_class, names, error):
    if isinstance(value, enum_class):
        return value
    if isinstance(value, str):
        try:
            return names[value.strip().lower()]
        except KeyError:
            raise error(value) from None
    if isinstance(value, int) and not isinstance(value, bool):
        try:
            return enum_class(value)
        except ValueError:
            raise error(value) from None
    raise error(value)

def facility(value):
    ''' Accepts a Facility, its code or one of its names. '''
    return _lookup(value, Facility, FACILITIES, exceptions.UnknownFacility)

def severity(value):
    ''' Accepts a Severity, its code or one of its names. '''
    return _lookup(value, Severity, SEVERITIES, exceptions.UnknownSeverity)

def encode(facility_value, severity_value):
    '''
    Combines a facility and a severity into the PRI value: facility * 8 + severity
    Examples:
      - encode('local0', 'notice') == 133
      - encode(Facility.SYSTEM, Severity.DEBUG) == 31
    '''
    return facility(facility_value) * 8 + severity(severity_value)

def decode(priority):
    if isinstance(priority, bool) or not isinstance(priority, int):
        raise exceptions.UnknownFacility(priority)
    return facility(priority >> 3), Severity(priority & SEVERITY_MASK)

def resolve(priority = None, facility_value = None, severity_value = None):
    '''
    The priority of a message, either precombined ('LOG_LOCAL0|LOG_NOTICE')
    or from a facility and severity pair. A given facility or severity wins over 'priority';
    the missing half of the pair defaults to user / notice.
    '''
    if facility_value is not None or severity_value is not None:
        return encode(
            Facility.USER if facility_value is None else facility_value,
            Severity.NOTICE if severity_value is None else severity_value,
        )
    if priority is None:
        return LOG_USER | LOG_NOTICE
    decode(priority)
    return int(priority)
