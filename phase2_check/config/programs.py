"""Expected processing-program versions for Phase 2 files."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ProgramVersion:
  """
  Expected version string for one processing stage.

  Attributes:
    stage: Human-readable stage name used in report details
    attribute: Global attribute holding the version string
    expected: Version string written by the Phase 2 program
  """
  stage: str
  attribute: str
  expected: str

  def matches(self, found: str) -> bool:
    """Compare version strings ignoring runs of whitespace."""
    return ' '.join(found.split()) == ' '.join(self.expected.split())


# The airmass and in situ correction programs are the only stages whose
# output changed between Phase 1 and Phase 2.
PHASE2_PROGRAM_VERSIONS: tuple[ProgramVersion, ...] = (
    ProgramVersion(
        stage='apply_tccon_airmass_correction',
        attribute='apply_tccon_airmass_correction_version',
        expected=('apply_tccon_airmass_correction     Version 1.38'
                  '     2022-06-08     JLL'),
    ),
    ProgramVersion(
        stage='apply_tccon_insitu_correction',
        attribute='apply_tccon_insitu_correction_version',
        expected=('apply_tccon_insitu_correction      Version 1.38'
                  '     2022-06-08     JLL'),
    ),
)
