"""Compiled-in Phase 2 reference data."""

from phase2_check.config.programs import ProgramVersion
from phase2_check.config.reference import ReferenceConfig
from phase2_check.config.reference import Tolerance
from phase2_check.config.tables import AdcfEntry
from phase2_check.config.tables import AicfEntry
from phase2_check.config.tables import WindowEntry

__all__ = [
    'ReferenceConfig',
    'Tolerance',
    'ProgramVersion',
    'AdcfEntry',
    'AicfEntry',
    'WindowEntry',
]
