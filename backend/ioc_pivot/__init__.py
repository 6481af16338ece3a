"""
ioc_pivot — recognise security indicators in selected text and map them
to search / scan actions.
"""

from ioc_pivot.command import Command
from ioc_pivot.dispatcher import Dispatcher
from ioc_pivot.errors import (
    CommandError,
    MissingCredentialError,
    ParseError,
    PivotError,
    UnknownAnalyzerError,
    UpstreamError,
)
from ioc_pivot.models.enums import AnalyzerKind, CommandAction, IndicatorType
from ioc_pivot.selector import Selector, classify

__version__ = "1.0.0"
