"""Tests for the package root exports."""

import s3request
from s3request import multipart


class TestExports:
    """Tests for names exported from the package root."""

    def test_error_family_exported(self):
        """Every planning error kind is importable from the root."""
        for name in [
            "PartPlanError",
            "PartSizeTooSmall",
            "PartSizeTooLarge",
            "ObjectTooLarge",
            "PartSizeRequired",
            "TooManyParts",
            "IncompleteReadError",
        ]:
            assert getattr(s3request, name) is getattr(multipart, name)
            assert name in s3request.__all__

    def test_catch_specific_kind(self):
        """A specific kind can be matched without the submodule."""
        plan = s3request.calc_part_info(-1)
        assert isinstance(plan.error, s3request.PartSizeRequired)
