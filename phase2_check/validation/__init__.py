"""
Validation framework for Phase 2 private files.

Each validator inspects one aspect of an open dataset and returns a
CheckResult; ValidationRunner collects them into a Report.
"""

from phase2_check.validation.base import CheckResult
from phase2_check.validation.base import Detail
from phase2_check.validation.base import Report
from phase2_check.validation.netcdf import FileAccessError
from phase2_check.validation.netcdf import FileOpenError
from phase2_check.validation.netcdf import open_dataset
from phase2_check.validation.runner import ValidationRunner

__all__ = [
    'CheckResult',
    'Detail',
    'Report',
    'FileAccessError',
    'FileOpenError',
    'open_dataset',
    'ValidationRunner',
]
