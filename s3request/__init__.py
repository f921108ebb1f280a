"""s3request: request-building primitives for S3-compatible clients.

Provides a case-insensitive multimap that renders SigV4 canonical headers
and query strings, and the planner that splits uploads into parts.
"""

__version__ = "1.0.0"

from s3request.models import PartPlan
from s3request.multimap import Multimap
from s3request.multipart import (
    IncompleteReadError,
    ObjectTooLarge,
    PartPlanError,
    PartSizeRequired,
    PartSizeTooLarge,
    PartSizeTooSmall,
    TooManyParts,
    calc_part_info,
    iter_parts,
    read_part,
)

__all__ = [
    "IncompleteReadError",
    "Multimap",
    "ObjectTooLarge",
    "PartPlan",
    "PartPlanError",
    "PartSizeRequired",
    "PartSizeTooLarge",
    "PartSizeTooSmall",
    "TooManyParts",
    "calc_part_info",
    "iter_parts",
    "read_part",
    "__version__",
]
