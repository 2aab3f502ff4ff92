"""
Phase 2 reference configuration.

ReferenceConfig bundles every expected value the validator compares a file
against. It is immutable and built once per process.

Usage:
  from phase2_check.config.reference import ReferenceConfig

  reference = ReferenceConfig.phase2()
  print(len(reference.windows), reference.tolerance)
"""

from dataclasses import dataclass
from dataclasses import field
import functools

from phase2_check.config.ingaas import ingaas_variables
from phase2_check.config.programs import PHASE2_PROGRAM_VERSIONS
from phase2_check.config.programs import ProgramVersion
from phase2_check.config.tables import AdcfEntry
from phase2_check.config.tables import AicfEntry
from phase2_check.config.tables import read_adcf_table
from phase2_check.config.tables import read_aicf_table
from phase2_check.config.tables import read_windows_table
from phase2_check.config.tables import WindowEntry


@dataclass(frozen=True)
class Tolerance:
  """
  Float comparison tolerance, with numpy.isclose semantics.

  Values are equal when |found - expected| <= atol + rtol * |expected|.
  The ADCFs and AICFs are only written to 4 decimal places in the .aia
  files, hence the absolute term.
  """
  rtol: float = 1e-6
  atol: float = 1e-4


@dataclass(frozen=True)
class ReferenceConfig:
  """
  Expected Phase 2 contents of a private netCDF file.

  Attributes:
    adcfs: Expected ADCF values per window
    aicfs: Expected AICF values per gas
    windows: Windows that must be present, with their scale factors
    removed_windows: Windows that Phase 2 no longer retrieves
    program_versions: Expected processing-program versions
    ingaas_variables: Per-window InGaAs variables that must be present
    tolerance: Float comparison tolerance
  """
  adcfs: tuple[AdcfEntry, ...]
  aicfs: tuple[AicfEntry, ...]
  windows: tuple[WindowEntry, ...]
  removed_windows: tuple[str, ...]
  program_versions: tuple[ProgramVersion, ...]
  ingaas_variables: tuple[str, ...]
  tolerance: Tolerance = field(default_factory=Tolerance)

  @classmethod
  def phase2(cls) -> 'ReferenceConfig':
    """Return the compiled-in Phase 2 reference (cached)."""
    return _load_phase2()

  @property
  def window_names(self) -> tuple[str, ...]:
    """Names of the windows that must be present."""
    return tuple(w.name for w in self.windows)


@functools.lru_cache(maxsize=1)
def _load_phase2() -> ReferenceConfig:
  windows, removed = read_windows_table()
  return ReferenceConfig(
      adcfs=read_adcf_table(),
      aicfs=read_aicf_table(),
      windows=windows,
      removed_windows=removed,
      program_versions=PHASE2_PROGRAM_VERSIONS,
      ingaas_variables=ingaas_variables(windows),
  )
