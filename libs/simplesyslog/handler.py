import sys
from logging import getLogger, Formatter, Handler, StreamHandler, CRITICAL, ERROR, WARNING, INFO, DEBUG
from os import environ

from . import priority
from .client import connect
from .options import SyslogOptions
from .priority import Severity


# map Python logging levels to syslog severities
LOGGING2SYSLOG = (
    (CRITICAL, Severity.CRITICAL),
    (ERROR, Severity.ERROR),
    (WARNING, Severity.WARNING),
    (INFO, Severity.INFO),
    (DEBUG, Severity.DEBUG),
)


def severity_for_level(levelno):
    for level, severity in LOGGING2SYSLOG:
        if levelno >= level:
            return severity
    return Severity.DEBUG


class SyslogHandler(Handler):
    '''
    Ships log records through a SyslogClient, the client builds the syslog header.
    '''

    def __init__(self, client, facility = priority.Facility.USER, raw = False):
        super().__init__()
        self.client = client
        self.facility = priority.facility(facility)
        self.raw = raw

    def emit(self, record):
        # records logged while the client shuts down
        if self.client.closed:
            return
        try:
            message = self.format(record)
            if self.raw:
                self.client.send_raw(message)
            else:
                self.client.send(message, facility = self.facility, severity = severity_for_level(record.levelno))
        except Exception:
            self.handleError(record)

    def close(self):
        try:
            self.client.close()
        finally:
            super().close()


def setup(address = None, transport = None, log_level = None, options = None, facility = None):
    '''
    Sends everything logged on the root logger to a syslog server.
    Arguments left out are read from SYSLOG_ADDRESS, SYSLOG_TRANSPORT (default udp), LOG_LEVEL (default DEBUG),
    SYSLOG_FACILITY (default user) and the SyslogOptions.from_environ() variables.
    Without an address the root logger writes to stdout instead.
    '''
    address = address or environ.get('SYSLOG_ADDRESS')
    transport = transport or environ.get('SYSLOG_TRANSPORT', 'udp')
    log_level = log_level or environ.get('LOG_LEVEL', 'DEBUG')
    if facility is None:
        facility = environ.get('SYSLOG_FACILITY', 'user')

    if address:
        client = connect(transport, address, options or SyslogOptions.from_environ())
        log_handler = SyslogHandler(client, facility = facility)
        log_handler.setFormatter(Formatter('%(levelname)s {%(processName)s[%(process)d]} %(name)s %(message)s'))
    else:
        log_handler = StreamHandler(sys.stdout)
        log_handler.setFormatter(Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))

    logger = getLogger()
    logger.setLevel(log_level)
    logger.addHandler(log_handler)
    logger.debug('Root logger is setup')
    return log_handler
