"""
Structural validators.

These checks look at which windows, variables and program versions a file
carries rather than at numeric values.
"""
from typing import Sequence

from phase2_check.config.programs import ProgramVersion
from phase2_check.validation.base import CheckResult
from phase2_check.validation.base import Detail
from phase2_check.validation.base import fail_result
from phase2_check.validation.base import make_result
from phase2_check.validation.base import pass_result
from phase2_check.validation.netcdf import AttributeNotFoundError
from phase2_check.validation.netcdf import DatasetLike
from phase2_check.validation.netcdf import FileAccessError
from phase2_check.validation.netcdf import has_variable
from phase2_check.validation.netcdf import read_global_attribute


def window_variable(window: str) -> str:
  """Variable whose presence marks a window as retrieved in the file."""
  return f'vsw_ada_x{window}'


class WindowsPresentValidator:
  """Validate that every expected window is in the file."""

  def validate(self,
               nch: DatasetLike,
               windows: Sequence[str],
               name: str = 'windows_present') -> CheckResult:
    """
    Check that vsw_ada_x<win> exists for each window.

    Args:
      nch: Open dataset
      windows: Window names that must be present
      name: Check name for result

    Returns:
      CheckResult listing each missing window
    """
    details: list[Detail] = []
    n_missing = 0
    for win in windows:
      varname = window_variable(win)
      if has_variable(nch, varname):
        details.append(Detail(True, f"window '{win}' is present as expected"))
      else:
        n_missing += 1
        details.append(
            Detail(False, f"window '{win}' is not present but should be "
                   f"(variable '{varname}' not found)"))

    return make_result(
        name, n_missing == 0, 'All windows expected to be present are',
        f'{n_missing}/{len(windows)} windows expected to be present are '
        'missing', details)


class WindowsRemovedValidator:
  """Validate that windows dropped in Phase 2 are no longer in the file."""

  def validate(self,
               nch: DatasetLike,
               windows: Sequence[str],
               name: str = 'windows_removed') -> CheckResult:
    """Check that vsw_ada_x<win> is absent for each removed window."""
    details: list[Detail] = []
    n_present = 0
    for win in windows:
      varname = window_variable(win)
      if has_variable(nch, varname):
        n_present += 1
        details.append(
            Detail(False, f"window '{win}' is present but should have been "
                   f"removed (variable '{varname}' found)"))
      else:
        details.append(Detail(True, f"window '{win}' is absent as expected"))

    return make_result(
        name, n_present == 0, 'All windows expected to be removed are',
        f'{n_present}/{len(windows)} windows expected to have been removed '
        'are present', details)


class VariablePresenceValidator:
  """Validate that a list of expected variables is in the file."""

  def __init__(self, label: str = 'InGaAs'):
    self.label = label

  def validate(self,
               nch: DatasetLike,
               variables: Sequence[str],
               name: str = 'ingaas_variables') -> CheckResult:
    """
    Count the expected variables missing from the file.

    Args:
      nch: Open dataset
      variables: Variable names that must be present
      name: Check name for result

    Returns:
      CheckResult whose summary gives <missing>/<total>
    """
    missing = [v for v in variables if not has_variable(nch, v)]
    count = f'{len(missing)}/{len(variables)} expected {self.label} variables'

    if not missing:
      return pass_result(
          name, f'All {len(variables)} expected {self.label} variables are '
          'present', [Detail(True, f'{count} are missing')])

    details = [Detail(False, f'{count} are missing')]
    details.extend(
        Detail(False, f"variable '{v}' is missing", level=3) for v in missing)
    return fail_result(name, f'{count} are missing', details)


class ProgramVersionValidator:
  """Validate the processing-program version attributes."""

  def validate(self,
               nch: DatasetLike,
               programs: Sequence[ProgramVersion],
               name: str = 'program_versions') -> CheckResult:
    """
    Compare each program-version global attribute with its expected string.

    A missing or unreadable attribute fails that stage; the other stages are
    still checked.
    """
    details: list[Detail] = []
    n_bad = 0
    for program in programs:
      try:
        found = read_global_attribute(nch, program.attribute)
      except AttributeNotFoundError as e:
        n_bad += 1
        details.append(Detail(False, f'{program.stage}: {e}'))
        continue
      except FileAccessError as e:
        n_bad += 1
        details.append(Detail(False, f'{program.stage}: I/O error: {e}'))
        continue

      if program.matches(found):
        details.append(Detail(True, f'{program.stage} version is correct'))
        details.append(Detail(True, f"{program.stage}: '{found}'", level=4))
      else:
        n_bad += 1
        details.append(
            Detail(False, f"{program.stage} version is incorrect: found "
                   f"'{found}', expected '{program.expected}'"))

    return make_result(
        name, n_bad == 0, 'Program versions match expected values',
        f'Program versions do not match expected values '
        f'({n_bad}/{len(programs)} stages)', details)
