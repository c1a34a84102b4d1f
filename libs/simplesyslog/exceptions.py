class SyslogError(Exception):
    pass

class ConfigurationError(SyslogError, ValueError):
    def __init__(self, name, value, reason):
        super().__init__()
        self.name = name
        self.value = value
        self.reason = reason

    def __str__(self):
        return 'Invalid {self.name} {self.value!r}: {self.reason}'.format(self = self)

class UnknownFacility(SyslogError, ValueError):
    def __init__(self, facility):
        super().__init__()
        self.facility = facility

    def __str__(self):
        return 'Unknown syslog facility: {!r}'.format(self.facility)

class UnknownSeverity(SyslogError, ValueError):
    def __init__(self, severity):
        super().__init__()
        self.severity = severity

    def __str__(self):
        return 'Unknown syslog severity: {!r}'.format(self.severity)


class ConnectError(SyslogError):
    pass

class UnknownTransport(ConnectError):
    def __init__(self, transport):
        super().__init__()
        self.transport = transport

    def __str__(self):
        return 'Unknown connection type {!r}'.format(self.transport)

class TransportFailure(ConnectError):
    def __init__(self, address, cause):
        super().__init__()
        self.address = address
        self.cause = cause

    def __str__(self):
        return 'Could not connect to {self.address}: {self.cause}'.format(self = self)


class SendError(SyslogError):
    pass

class ClientClosed(SendError):
    def __str__(self):
        return 'Connection to the syslog server is closed'

class BudgetExceeded(SendError):
    '''
    Raised before any write once the client has sent more than its byte budget.
    '''
    def __init__(self, bytes_sent, max_bytes):
        super().__init__()
        self.bytes_sent = bytes_sent
        self.max_bytes = max_bytes

    def __str__(self):
        return 'Too many bytes sent ({self.bytes_sent} > {self.max_bytes})'.format(self = self)

class WriteFailure(SendError):
    '''
    'bytes_written' is what made it onto the connection before 'cause' was raised.
    It has already been added to the client's running total.
    '''
    def __init__(self, bytes_written, cause):
        super().__init__()
        self.bytes_written = bytes_written
        self.cause = cause

    def __str__(self):
        return 'Write failed after {self.bytes_written} bytes: {self.cause}'.format(self = self)


class CloseError(SyslogError):
    def __init__(self, cause):
        super().__init__()
        self.cause = cause

    def __str__(self):
        return 'Could not close connection: {}'.format(self.cause)
