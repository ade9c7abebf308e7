from .log import StructuredLogger, TRACE
from .allocator import AbstractRangeTagAllocator, SimpleRangeTagAllocator, DEFAULT_RANGE_TAG_ALLOCATOR
from .sequence import (MIN_VALUE, DEFAULT_VALUE, MAX_VALUE, RANGE_TAG_COUNT, InvalidSequenceNumber, ValidationPolicy,
                       AbstractSequenceGenerator, SequenceNumber, assert_valid_sequence, combine_sequence,
                       split_sequence)
from .jsonutils import json_encode

__all__ = [
    'StructuredLogger', 'TRACE', 'AbstractRangeTagAllocator', 'SimpleRangeTagAllocator',
    'DEFAULT_RANGE_TAG_ALLOCATOR', 'MIN_VALUE', 'DEFAULT_VALUE', 'MAX_VALUE', 'RANGE_TAG_COUNT',
    'InvalidSequenceNumber', 'ValidationPolicy', 'AbstractSequenceGenerator', 'SequenceNumber',
    'assert_valid_sequence', 'combine_sequence', 'split_sequence', 'json_encode'
]
