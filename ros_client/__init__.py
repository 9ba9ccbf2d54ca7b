"""RouterOS API client"""

__version__ = '0.3.0'

from .ros_errors import (
	ErrorKind,
	RouterOSError,
	ConnectionFailure,
	ConnectionLost,
	ReadTimeout,
	ProtocolError,
	ProtocolTrap,
	ProtocolFatal,
	AuthenticationFailure,
	UsageError,
	AlreadyConnected,
)
from .ros_options import Options
from .ros_protocol import Response
from .ros_client import RouterOS, State
