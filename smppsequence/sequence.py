import threading
from abc import ABC, abstractmethod
from enum import IntEnum
from logging import DEBUG
from typing import Optional, Tuple
from .allocator import DEFAULT_RANGE_TAG_ALLOCATOR, AbstractRangeTagAllocator
from .log import StructuredLogger
from .utils import check_param

# Some SMSCs start at 0, which the SMPP 3.4 specification does not allow.
# The top nibble is taken by the range tag, hence 28 bits.
MIN_VALUE: int = 0x0000000
DEFAULT_VALUE: int = 0x0000001
MAX_VALUE: int = 0xFFFFFFF

RANGE_TAG_COUNT: int = 16
RANGE_TAG_SHIFT: int = 28

_INT32_MIN: int = -0x80000000
_UINT32_MAX: int = 0xFFFFFFFF


class ValidationPolicy(IntEnum):
    '''
    How strictly initial sequence values are checked.
    '''
    PERMISSIVE = 0  # Any 32-bit value, signed or unsigned
    STRICT = 1  # MIN_VALUE to MAX_VALUE only


class InvalidSequenceNumber(ValueError):

    def __init__(self, sequence_num: int, message: str) -> None:
        super().__init__(message)
        self.sequence_num: int = sequence_num


def assert_valid_sequence(sequence_num: int, policy: ValidationPolicy = ValidationPolicy.PERMISSIVE) -> None:
    if policy == ValidationPolicy.STRICT:
        if not MIN_VALUE <= sequence_num <= MAX_VALUE:
            raise InvalidSequenceNumber(sequence_num, f'The sequence_num: {sequence_num} is outside of limits '
                                                      f'{MIN_VALUE}-{MAX_VALUE:#x}.')
    elif not _INT32_MIN <= sequence_num <= _UINT32_MAX:
        raise InvalidSequenceNumber(sequence_num, f'The sequence_num: {sequence_num} does not fit in 32 bits.')


def combine_sequence(range_tag: int, counter: int) -> int:
    return ((range_tag % RANGE_TAG_COUNT) << RANGE_TAG_SHIFT) | (counter % (MAX_VALUE + 1))


def split_sequence(sequence_num: int) -> Tuple[int, int]:
    '''
    Returns (range_tag, counter) of a sequence_num, e.g. one echoed back in a response PDU.
    '''
    return (sequence_num >> RANGE_TAG_SHIFT) & (RANGE_TAG_COUNT - 1), sequence_num & MAX_VALUE


class AbstractSequenceGenerator(ABC):
    '''
    Interface that must be implemented to satisfy smppsequence sequence generator.
    User implementations should inherit this class and
    implement the :func:`next_sequence <AbstractSequenceGenerator.next_sequence>` method.

    In SMPP, sequence_num is an Integer which allows requests and responses to be correlated.
    The sequence_num should increase monotonically and wrap around when it reaches the maximum.
    '''

    @abstractmethod
    def next_sequence(self) -> int:
        '''
        Returns the sequence_num to put in the next outbound request.
        '''
        raise NotImplementedError()


class SequenceNumber(AbstractSequenceGenerator):
    '''
    Thread-safe sequence_num generator for a single bind.

    Every generator gets a range tag from its allocator when it is created. The tag is placed in
    the top nibble of each sequence_num, and a 28-bit counter in the rest. The counter goes from
    1 up to MAX_VALUE and then wraps back to 1. Up to 16 generators thus produce disjoint
    sequence_nums, and a response can be mapped back to its bind by the top nibble alone.
    '''

    def __init__(self,
                 initial_value: Optional[int] = None,
                 policy: ValidationPolicy = ValidationPolicy.PERMISSIVE,
                 allocator: Optional[AbstractRangeTagAllocator] = None,
                 logger: Optional[StructuredLogger] = None) -> None:
        '''
        Parameters:
            initial_value: First counter value to hand out. Defaults to DEFAULT_VALUE.
            policy: Validation applied to `initial_value`.
            allocator: Source of the range tag. Defaults to the process-wide allocator.
            logger: Logger to use. By default, a per range tag logger at WARNING level is created.

        Raises:
            InvalidSequenceNumber: raised if `initial_value` is rejected by `policy`.
            ValueError: raised if a parameter is of wrong type.
        '''
        check_param(initial_value, 'initial_value', int, optional=True)
        check_param(policy, 'policy', ValidationPolicy)
        check_param(allocator, 'allocator', AbstractRangeTagAllocator, optional=True)
        check_param(logger, 'logger', StructuredLogger, optional=True)
        if initial_value is not None:
            assert_valid_sequence(initial_value, policy)

        self.policy: ValidationPolicy = policy
        self._allocator: AbstractRangeTagAllocator = allocator or DEFAULT_RANGE_TAG_ALLOCATOR
        index: int = self._allocator.allocate()
        self._range_tag: int = index % RANGE_TAG_COUNT
        self._value: int = DEFAULT_VALUE if initial_value is None else initial_value
        self._lock: threading.Lock = threading.Lock()
        self._logger: StructuredLogger = logger or StructuredLogger.for_range_tag(self._range_tag)

        if index >= RANGE_TAG_COUNT:
            self._logger.info('Range tag reused', allocator_index=index, range_tag=self._range_tag)
        self._logger.debug('Created sequence generator', range_tag=self._range_tag,
                           initial_value=self._value, policy=policy.name)

    @property
    def range_tag(self) -> int:
        return self._range_tag

    def next(self) -> int:
        '''
        Get the next number in this sequence and advance the counter.
        '''
        wrapped: bool = False
        with self._lock:
            value: int = self._value
            if self._value == MAX_VALUE:
                self._value = DEFAULT_VALUE
                wrapped = True
            else:
                self._value += 1
        if wrapped and self._logger.isEnabledFor(DEBUG):
            self._logger.debug('Sequence counter wrapped', range_tag=self._range_tag, last_value=value)
        return combine_sequence(self._range_tag, value)

    def peek(self) -> int:
        '''
        Returns what the next call to :func:`next <SequenceNumber.next>` will return,
        without advancing the counter.
        '''
        with self._lock:
            return combine_sequence(self._range_tag, self._value)

    def reset(self) -> None:
        with self._lock:
            self._value = DEFAULT_VALUE
        self._logger.debug('Sequence generator reset', range_tag=self._range_tag)

    def next_sequence(self) -> int:
        return self.next()

    def owns(self, sequence_num: int) -> bool:
        return split_sequence(sequence_num)[0] == self._range_tag
