"""Data models for request building and multipart planning."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from s3request.multipart import PartPlanError

# Sentinel part count for objects whose size is only known once streamed
UNKNOWN_PART_COUNT = -1


@dataclass(frozen=True)
class PartPlan:
    """Outcome of planning a multipart upload.

    On failure, error is set and part_size/part_count hold whatever was
    decided before the failing check. object_size is negative when the
    object size is unknown.
    """

    part_size: int
    part_count: int
    error: Optional["PartPlanError"] = None
    object_size: int = -1

    @property
    def ok(self) -> bool:
        """Check if the plan is usable."""
        return self.error is None

    @property
    def unknown_count(self) -> bool:
        """Check if the part count is decided while streaming."""
        return self.part_count == UNKNOWN_PART_COUNT

    def raise_for_error(self) -> "PartPlan":
        """Raise the planning error, if any.

        Returns:
            The plan itself, so calls can be chained.

        Raises:
            PartPlanError: If planning failed.
        """
        if self.error is not None:
            raise self.error
        return self
