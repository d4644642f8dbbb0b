"""
callspy - call-recording spies for tests

Wrap a callable, or an attribute of an object, class or module, with a spy
that records every call and can be restored afterwards.
"""

from .comparison import same_value
from .errors import AttributeNotFoundError, CallIndexError, SpyArgumentError, SpyUsageError
from .factory import create_spy
from .group import SpiesGroup, create_spies_group
from .logger import LoggingConfig, configure_logging, get_logger
from .proxy import BoundSpy, Spy
from .records import CallRecord

__all__ = [
    "AttributeNotFoundError",
    "BoundSpy",
    "CallIndexError",
    "CallRecord",
    "LoggingConfig",
    "SpiesGroup",
    "Spy",
    "SpyArgumentError",
    "SpyUsageError",
    "configure_logging",
    "create_spies_group",
    "create_spy",
    "get_logger",
    "same_value",
]
__version__ = "0.1.0"
