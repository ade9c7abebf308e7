import datetime
import logging
from logging import WARNING, Formatter, Handler, Logger, StreamHandler
from typing import Any, Dict, Optional, Union
from .jsonutils import json_encode
from .utils import check_param

TRACE: int = logging.DEBUG - 5
# Add TRACE level to logging module
logging.addLevelName(TRACE, 'TRACE')
setattr(logging, 'TRACE', TRACE)

_LOGGER_ARGS = ('exc_info', 'extra', 'stack_info', 'stacklevel')


class StructuredLogger(Logger):
    '''
    Logger that appends keyword arguments to the message as JSON.

    example usage:

    .. highlight:: python
    .. code-block:: python

        logger = StructuredLogger.for_range_tag(3, 'DEBUG')
        logger.debug('Sequence counter wrapped', last_value=0xFFFFFFF)
        # Sequence counter wrapped >>> {"last_value":268435455,"timestamp":"...","log_level":"DEBUG","range_tag":3}
    '''

    def __init__(self,
                 logger_name: str,
                 level: Union[str, int] = WARNING,
                 range_tag: Optional[int] = None,
                 handler: Optional[Handler] = None,
                 include_timestamp: bool = True) -> None:
        '''
        Parameters:
            logger_name: Name of the logger.
            level: The level at which to log
            range_tag: Range tag of the generator, included in all log statements
            handler: Python logging handler to use. By default, `logging.StreamHandler` is used.
            include_timestamp: Whether to add datetime in ISO8601 format to log entries.
        '''
        check_param(logger_name, 'logger_name', str)
        check_param(level, 'level', (int, str))
        check_param(range_tag, 'range_tag', int, optional=True)
        check_param(handler, 'handler', Handler, optional=True)
        check_param(include_timestamp, 'include_timestamp', bool)

        super().__init__(name=logger_name, level=self._check_level(level))
        self.range_tag: Optional[int] = range_tag
        self.handler: Handler = handler or StreamHandler()
        self.include_timestamp: bool = include_timestamp

        self.handler.setFormatter(Formatter('%(message)s'))
        self.handler.setLevel(self.level)
        self.addHandler(self.handler)

    @classmethod
    def for_range_tag(cls, range_tag: int, level: Union[str, int] = WARNING,
                      handler: Optional[Handler] = None) -> 'StructuredLogger':
        return cls(f'smppsequence.{range_tag}', level, range_tag=range_tag, handler=handler)

    def trace(self, msg: Any, *args, **kwargs):
        if self.isEnabledFor(TRACE):
            self._log(TRACE, msg, args, **kwargs)

    def _log(self, level: int, msg: Any, args, **kwargs):
        # Logger.debug, info etc. pass their keyword arguments through here
        user_args: Dict[str, Any] = {key: value for key, value in kwargs.items() if key not in _LOGGER_ARGS}
        logger_args: Dict[str, Any] = {key: value for key, value in kwargs.items() if key in _LOGGER_ARGS}
        if self.include_timestamp:
            user_args['timestamp'] = datetime.datetime.now().isoformat()
        user_args['log_level'] = logging.getLevelName(level)
        if self.range_tag is not None:
            user_args.setdefault('range_tag', self.range_tag)
        return super()._log(level, f'{msg} >>> {json_encode(user_args)}', args, **logger_args)

    @staticmethod
    def _check_level(level: Union[str, int]) -> int:
        if isinstance(level, str):
            level = logging.getLevelName(level.upper())
            if not isinstance(level, int):
                # getLevelName returns string f'Level {level}' if level is unknown
                raise ValueError(f'Unknown logging {level}.')
        return level
