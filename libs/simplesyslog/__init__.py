from . import exceptions
from .priority import (
    Facility,
    Severity,
    encode,
    decode,
    LOG_EMERG, LOG_ALERT, LOG_CRIT, LOG_ERR, LOG_WARNING, LOG_NOTICE, LOG_INFO, LOG_DEBUG,
    LOG_KERN, LOG_USER, LOG_MAIL, LOG_DAEMON, LOG_AUTH, LOG_SYSLOG, LOG_LPR, LOG_NEWS,
    LOG_UUCP, LOG_CRON, LOG_AUTHPRIV, LOG_FTP,
    LOG_LOCAL0, LOG_LOCAL1, LOG_LOCAL2, LOG_LOCAL3, LOG_LOCAL4, LOG_LOCAL5, LOG_LOCAL6, LOG_LOCAL7,
)
from .formatting import HeaderMode, build_header, truncate
from .options import SyslogOptions
from .transport import Transport, DEFAULT_HOSTNAME, DEFAULT_IP
from .client import SyslogClient, connect
from .asyncclient import AsyncSyslogClient
from .handler import SyslogHandler, setup
