"""Multipart upload planning.

Decides how an object is cut into parts before any request is sent:
- Validate a caller-chosen part size against the service limits
- Choose a part size when the caller did not
- Compute the part count and reject plans with too many parts
- Read the planned parts from a byte stream
"""

import logging
from typing import BinaryIO, Generator, Optional

from s3request.models import UNKNOWN_PART_COUNT, PartPlan

logger = logging.getLogger(__name__)

MiB = 1024 * 1024
GiB = 1024 * MiB
TiB = 1024 * GiB

# Service limits for multipart uploads
MIN_PART_SIZE = 5 * MiB
MAX_PART_SIZE = 5 * GiB
MAX_OBJECT_SIZE = 5 * TiB
MAX_MULTIPART_COUNT = 10000


class PartPlanError(Exception):
    """Base class for multipart planning failures.

    These are pre-flight validation errors: retrying with the same
    arguments always fails the same way.
    """

    def __init__(self, message: str, value: int = 0, limit: int = 0):
        super().__init__(message)
        self.value = value
        self.limit = limit


class PartSizeTooSmall(PartPlanError):
    """Raised when a requested part size is below MIN_PART_SIZE."""


class PartSizeTooLarge(PartPlanError):
    """Raised when a requested part size is above MAX_PART_SIZE."""


class ObjectTooLarge(PartPlanError):
    """Raised when the object is larger than MAX_OBJECT_SIZE."""


class PartSizeRequired(PartPlanError):
    """Raised when the object size is unknown and no part size is given."""


class TooManyParts(PartPlanError):
    """Raised when a plan needs more than MAX_MULTIPART_COUNT parts."""


class IncompleteReadError(Exception):
    """Raised when a stream ends before the planned object size."""

    def __init__(self, message: str, expected: int, actual: int):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


def _ceil_div(numerator: int, denominator: int) -> int:
    return -(-numerator // denominator)


def _check_part_size(part_size: int) -> Optional[PartPlanError]:
    if part_size < MIN_PART_SIZE:
        return PartSizeTooSmall(
            f"part size {part_size} is not supported; minimum allowed 5MiB",
            value=part_size,
            limit=MIN_PART_SIZE,
        )
    if part_size > MAX_PART_SIZE:
        return PartSizeTooLarge(
            f"part size {part_size} is not supported; maximum allowed 5GiB",
            value=part_size,
            limit=MAX_PART_SIZE,
        )
    return None


def calc_part_info(object_size: int, part_size: int = 0) -> PartPlan:
    """Compute the part size and part count for a multipart upload.

    Args:
        object_size: Object size in bytes; negative when unknown.
        part_size: Preferred part size in bytes; 0 lets the planner choose
                   the smallest 5 MiB multiple that stays within
                   MAX_MULTIPART_COUNT parts.

    Returns:
        PartPlan with the final part size and count. part_count is -1
        when the object size is unknown. On invalid input the plan's
        error is set instead; nothing is raised.

    Example:
        >>> calc_part_info(12 * MiB, 5 * MiB)
        PartPlan(part_size=5242880, part_count=3, error=None, object_size=12582912)
    """
    if part_size < 0:
        part_size = 0

    if part_size > 0:
        error = _check_part_size(part_size)
        if error is not None:
            return PartPlan(part_size, 0, error, object_size)

    if object_size >= 0:
        if object_size > MAX_OBJECT_SIZE:
            return PartPlan(part_size, 0, ObjectTooLarge(
                f"object size {object_size} is not supported; maximum allowed 5TiB",
                value=object_size,
                limit=MAX_OBJECT_SIZE,
            ), object_size)
    elif part_size == 0:
        return PartPlan(0, 0, PartSizeRequired(
            "valid part size must be provided when object size is unknown"
        ), object_size)

    # Unknown size: parts are cut while streaming
    if object_size < 0:
        return PartPlan(part_size, UNKNOWN_PART_COUNT, object_size=object_size)

    if part_size == 0:
        candidate = _ceil_div(object_size, MAX_MULTIPART_COUNT)
        part_size = _ceil_div(candidate, MIN_PART_SIZE) * MIN_PART_SIZE
        logger.debug("chose part size %d for object size %d", part_size, object_size)

    if part_size > object_size:
        part_size = object_size

    part_count = _ceil_div(object_size, part_size) if part_size > 0 else 1
    if part_count > MAX_MULTIPART_COUNT:
        return PartPlan(part_size, part_count, TooManyParts(
            f"object size {object_size} and part size {part_size} make more "
            f"than {MAX_MULTIPART_COUNT} parts for upload",
            value=part_count,
            limit=MAX_MULTIPART_COUNT,
        ), object_size)

    logger.debug(
        "planned %d part(s) of %d bytes for object size %d",
        part_count, part_size, object_size,
    )
    return PartPlan(part_size, part_count, object_size=object_size)


def read_part(stream: BinaryIO, size: int) -> bytes:
    """Read up to size bytes, retrying short reads until end of stream.

    Args:
        stream: Binary stream to read from.
        size: Maximum number of bytes to read.

    Returns:
        The bytes read; shorter than size only at end of stream.
    """
    chunks = []
    remaining = size
    while remaining > 0:
        chunk = stream.read(remaining)
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def iter_parts(
    stream: BinaryIO,
    plan: PartPlan,
) -> Generator[tuple[int, bytes], None, None]:
    """Iterate over the parts of a planned upload.

    Args:
        stream: Binary stream positioned at the start of the object.
        plan: A successful plan from calc_part_info.

    Yields:
        Tuples of (part_number, data), part numbers starting at 1.
        At least one part is always yielded, empty for an empty object.

    Raises:
        PartPlanError: If the plan carries an error, or an unknown-size
                       stream needs more than MAX_MULTIPART_COUNT parts.
        IncompleteReadError: If the stream ends before the planned size.
    """
    plan.raise_for_error()

    if not plan.unknown_count:
        total = 0
        for part_number in range(1, plan.part_count + 1):
            size = min(plan.part_size, plan.object_size - total)
            data = read_part(stream, size)
            total += len(data)
            if len(data) < size:
                raise IncompleteReadError(
                    f"stream ended after {total} bytes; expected {plan.object_size}",
                    expected=plan.object_size,
                    actual=total,
                )
            yield part_number, data
        return

    part_number = 1
    while True:
        data = read_part(stream, plan.part_size)
        if data or part_number == 1:
            if part_number > MAX_MULTIPART_COUNT:
                raise TooManyParts(
                    f"stream needs more than {MAX_MULTIPART_COUNT} parts of "
                    f"size {plan.part_size}",
                    value=part_number,
                    limit=MAX_MULTIPART_COUNT,
                )
            yield part_number, data
        if len(data) < plan.part_size:
            break
        part_number += 1
