"""
Validate a TCCON private netCDF file against the GGG2020 Phase 2 reference.

Checks (all must pass):
1) ADCF values
2) AICF values
3) Window-to-window scale factors
4) Windows expected in Phase 2 are present
5) Windows dropped in Phase 2 are absent
6) Correction program versions
7) InGaAs per-window variables are present

Exit code:
  0 = all checks pass
  1 = at least one check failed
  2 = the file could not be opened

Usage:
  python -m phase2_check.validate pa20040721_20041222.private.nc
  python -m phase2_check.validate -vvv --failures-only FILE
  check-phase2 -q FILE && echo "Phase 2"
"""
import argparse
import logging
from pathlib import Path
from typing import Sequence

from phase2_check import __version__
from phase2_check.config.reference import ReferenceConfig
from phase2_check.validation.base import CheckResult
from phase2_check.validation.base import Report
from phase2_check.validation.netcdf import DatasetLike
from phase2_check.validation.netcdf import FileOpenError
from phase2_check.validation.netcdf import open_dataset
from phase2_check.validation.runner import ValidationRunner
from phase2_check.validation.structure import ProgramVersionValidator
from phase2_check.validation.structure import VariablePresenceValidator
from phase2_check.validation.structure import WindowsPresentValidator
from phase2_check.validation.structure import WindowsRemovedValidator
from phase2_check.validation.values import AdcfValidator
from phase2_check.validation.values import AicfValidator
from phase2_check.validation.values import WindowScaleFactorValidator

logger = logging.getLogger(__name__)

EXIT_PASS = 0
EXIT_FAIL = 1
EXIT_OPEN_ERROR = 2


class Phase2Validator:
  """
  Run the Phase 2 checks against one open dataset.

  Each check_* method is independent and returns a CheckResult; missing
  variables or attributes fail only the check that needs them.
  """

  def __init__(self, reference: ReferenceConfig | None = None):
    self.reference = reference or ReferenceConfig.phase2()
    tolerance = self.reference.tolerance
    self._adcf = AdcfValidator(tolerance)
    self._aicf = AicfValidator(tolerance)
    self._window_sf = WindowScaleFactorValidator(tolerance)

  def check_adcf(self, nch: DatasetLike) -> CheckResult:
    return self._adcf.validate(nch, self.reference.adcfs)

  def check_aicf(self, nch: DatasetLike) -> CheckResult:
    return self._aicf.validate(nch, self.reference.aicfs)

  def check_window_scale_factors(self, nch: DatasetLike) -> CheckResult:
    return self._window_sf.validate(nch, self.reference.windows)

  def check_windows_present(self, nch: DatasetLike) -> CheckResult:
    return WindowsPresentValidator().validate(nch, self.reference.window_names)

  def check_windows_removed(self, nch: DatasetLike) -> CheckResult:
    return WindowsRemovedValidator().validate(nch,
                                              self.reference.removed_windows)

  def check_program_versions(self, nch: DatasetLike) -> CheckResult:
    return ProgramVersionValidator().validate(nch,
                                              self.reference.program_versions)

  def check_variable_presence(self, nch: DatasetLike) -> CheckResult:
    return VariablePresenceValidator('InGaAs').validate(
        nch, self.reference.ingaas_variables)

  def build_runner(self, nch: DatasetLike, label: str) -> ValidationRunner:
    """Register all checks, in display order, on a new runner."""
    runner = ValidationRunner(label)
    runner.add_check('adcf', 'ADCFs', self.check_adcf, nch)
    runner.add_check('aicf', 'AICFs', self.check_aicf, nch)
    runner.add_check('window_sf', 'Window-to-window scale factors',
                     self.check_window_scale_factors, nch)
    runner.add_check('windows_present', 'Windows expected to be present',
                     self.check_windows_present, nch)
    runner.add_check('windows_removed', 'Windows expected to be removed',
                     self.check_windows_removed, nch)
    runner.add_check('program_versions', 'Program versions',
                     self.check_program_versions, nch)
    runner.add_check('ingaas_variables', 'InGaAs variables',
                     self.check_variable_presence, nch)
    return runner

  def validate(self, nch: DatasetLike, label: str) -> Report:
    """Run every check and return the report."""
    return self.build_runner(nch, label).run()


def validate_file(path: str | Path,
                  reference: ReferenceConfig | None = None) -> Report:
  """
  Open a private file, run every check and close it again.

  Raises:
    FileOpenError: if the file cannot be opened
  """
  with open_dataset(Path(path)) as nch:
    return Phase2Validator(reference).validate(nch, str(path))


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
  parser = argparse.ArgumentParser(
      prog='check-phase2',
      description=('Verifies that TCCON .private.nc files have been updated '
                   'to GGG2020 Phase 2'),
  )
  parser.add_argument('nc_file', help='The .private.nc file to check')
  output = parser.add_mutually_exclusive_group()
  output.add_argument(
      '-v',
      '--verbose',
      action='count',
      default=0,
      help=('Increase the level of detail shown on screen. Repeat for more: '
            '1 = each test, 2 = each gas/window, 3 = each variable, '
            '4 = each value'),
  )
  output.add_argument(
      '-q',
      '--quiet',
      action='store_true',
      help=('Suppress all standard output; pass or fail is only indicated '
            'by the exit code (0 = pass, >0 = fail)'),
  )
  parser.add_argument(
      '-f',
      '--failures-only',
      action='store_true',
      help='Only print failure messages for higher verbosity messaging',
  )
  parser.add_argument('--version',
                      action='version',
                      version=f'%(prog)s {__version__}')
  return parser.parse_args(argv)


def _setup_logging(verbosity: int) -> None:
  logging.basicConfig(
      level=logging.DEBUG if verbosity >= 4 else logging.ERROR,
      format='%(asctime)s [%(levelname)s] %(message)s',
      datefmt='%Y-%m-%d %H:%M:%S',
  )


def main(argv: Sequence[str] | None = None) -> int:
  """CLI entrypoint."""
  args = _parse_args(argv)
  verbosity = -1 if args.quiet else args.verbose
  _setup_logging(verbosity)

  logger.debug('Checking %s', args.nc_file)
  try:
    with open_dataset(Path(args.nc_file)) as nch:
      runner = Phase2Validator().build_runner(nch, args.nc_file)
      runner.run()
  except FileOpenError as e:
    logger.error('%s', e)
    return EXIT_OPEN_ERROR

  runner.log_summary()
  runner.print_report(verbosity, args.failures_only)
  return EXIT_PASS if runner.all_passed else EXIT_FAIL


if __name__ == '__main__':
  raise SystemExit(main())
