import threading
from abc import ABC, abstractmethod
from .utils import check_param


class AbstractRangeTagAllocator(ABC):
    '''
    Interface that must be implemented to satisfy smppsequence range tag allocation.
    User implementations should inherit this class and implement the
    :func:`allocate <AbstractRangeTagAllocator.allocate>` and
    :func:`reset <AbstractRangeTagAllocator.reset>` methods.

    Every :class:`SequenceNumber <smppsequence.sequence.SequenceNumber>` asks the allocator
    for an index when it is created. The index, reduced modulo 16, becomes the top nibble of
    every sequence_num the generator produces, so that generators of different binds
    produce disjoint sequence_num ranges.
    '''

    @abstractmethod
    def allocate(self) -> int:
        '''
        Returns a non-negative index. Consecutive calls must never return the same
        intermediate value, even when called concurrently.
        '''
        raise NotImplementedError()

    @abstractmethod
    def reset(self) -> None:
        '''
        Start allocating from the beginning again.
        '''
        raise NotImplementedError()


class SimpleRangeTagAllocator(AbstractRangeTagAllocator):
    '''
    This is a thread-safe, in-memory implementation of AbstractRangeTagAllocator.
    The index only grows; callers reduce it modulo 16.
    '''

    def __init__(self, start: int = 0) -> None:
        '''
        Parameters:
            start: The first index to hand out.
        '''
        check_param(start, 'start', int)
        if start < 0:
            raise ValueError('Parameter `start` must not be negative.')
        self._start: int = start
        self._index: int = start
        self._lock: threading.Lock = threading.Lock()

    def allocate(self) -> int:
        with self._lock:
            index: int = self._index
            self._index += 1
        return index

    def peek(self) -> int:
        with self._lock:
            return self._index

    def reset(self) -> None:
        with self._lock:
            self._index = self._start


# Shared by all generators created without an explicit allocator
DEFAULT_RANGE_TAG_ALLOCATOR: SimpleRangeTagAllocator = SimpleRangeTagAllocator()
