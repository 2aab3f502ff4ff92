"""
Correction-factor value validators.

Compares the ADCF, AICF and window-to-window scale factor variables of a
private file element-wise against the Phase 2 reference tables.
"""
from typing import Sequence

import numpy as np

from phase2_check.config.reference import Tolerance
from phase2_check.config.tables import AdcfEntry
from phase2_check.config.tables import AicfEntry
from phase2_check.config.tables import WindowEntry
from phase2_check.validation.base import CheckResult
from phase2_check.validation.base import Detail
from phase2_check.validation.base import make_result
from phase2_check.validation.netcdf import DatasetLike
from phase2_check.validation.netcdf import FileAccessError
from phase2_check.validation.netcdf import read_float_variable
from phase2_check.validation.netcdf import VariableNotFoundError

# Per-element details reported for one variable
MAX_ELEMENT_DETAILS = 5


class FloatValuesValidator:
  """
  Base for validators that compare variables to constant expected values.

  Every element of a variable must equal the expected value within the
  tolerance; masked elements never do.
  """

  def __init__(self, tolerance: Tolerance | None = None):
    self.tolerance = tolerance or Tolerance()

  def check_variable(self, nch: DatasetLike, varname: str,
                     expected: float) -> tuple[bool, list[Detail]]:
    """
    Compare all elements of one variable to an expected value.

    Returns:
      Tuple of (ok, details); a missing or unreadable variable is a failure,
      not an error
    """
    try:
      values = read_float_variable(nch, varname)
    except VariableNotFoundError as e:
      return False, [Detail(False, str(e), level=3)]
    except FileAccessError as e:
      return False, [Detail(False, f'I/O error: {e}', level=3)]

    bad = ~np.isclose(values, expected, rtol=self.tolerance.rtol,
                      atol=self.tolerance.atol)
    n_wrong = int(bad.sum())
    n_total = int(values.size)

    if n_wrong == 0:
      return True, [Detail(True, varname, level=3)]

    percent = n_wrong / n_total * 100.0
    details = [
        Detail(False,
               f'{n_wrong}/{n_total} ({percent:.2f}%) of {varname} have '
               'incorrect values',
               level=3)
    ]
    for idx in np.flatnonzero(bad)[:MAX_ELEMENT_DETAILS]:
      details.append(
          Detail(False,
                 f'{varname}[{idx}] = {values[idx]:g}, expected {expected:g}',
                 level=4))
    return False, details

  def check_group(
      self, nch: DatasetLike, group: str, noun: str,
      expected: Sequence[tuple[str, float]]) -> tuple[bool, list[Detail]]:
    """
    Check the variables belonging to one gas or window.

    Args:
      nch: Open dataset
      group: Gas or window name
      noun: What the variables hold, for the per-group detail
      expected: (variable name, expected value) pairs

    Returns:
      Tuple of (ok, details) with the per-group detail first
    """
    group_ok = True
    var_details: list[Detail] = []
    for varname, value in expected:
      var_ok, details = self.check_variable(nch, varname, value)
      group_ok = group_ok and var_ok
      var_details.extend(details)

    state = 'correct' if group_ok else 'incorrect'
    group_detail = Detail(group_ok, f'{group} {noun} are {state}')
    return group_ok, [group_detail] + var_details


def _group_result(name: str, what: str,
                  outcomes: list[tuple[bool, list[Detail]]],
                  unit: str) -> CheckResult:
  n_bad = sum(1 for ok, _ in outcomes if not ok)
  details = [d for _, group_details in outcomes for d in group_details]
  return make_result(
      name, n_bad == 0, f'{what} match expected values',
      f'{what} do not match expected values ({n_bad}/{len(outcomes)} {unit})',
      details)


class AdcfValidator(FloatValuesValidator):
  """Validate airmass-dependent correction factors for each window."""

  def validate(self,
               nch: DatasetLike,
               adcfs: Sequence[AdcfEntry],
               name: str = 'adcf') -> CheckResult:
    """
    Check <win>_adcf, <win>_adcf_error, <win>_g and <win>_p for each window.

    Args:
      nch: Open dataset
      adcfs: Expected ADCF entries
      name: Check name for result

    Returns:
      CheckResult with pass/fail status
    """
    outcomes = []
    for entry in sorted(adcfs, key=lambda e: e.window):
      win = entry.window
      outcomes.append(
          self.check_group(nch, win, 'ADCFs', [
              (f'{win}_adcf', entry.adcf),
              (f'{win}_adcf_error', entry.adcf_error),
              (f'{win}_g', float(entry.g)),
              (f'{win}_p', float(entry.p)),
          ]))
    return _group_result(name, 'ADCFs', outcomes, 'windows')


class AicfValidator(FloatValuesValidator):
  """Validate airmass-independent correction factors for each gas."""

  def validate(self,
               nch: DatasetLike,
               aicfs: Sequence[AicfEntry],
               name: str = 'aicf') -> CheckResult:
    """Check <gas>_aicf and <gas>_aicf_error for each gas."""
    outcomes = []
    for entry in sorted(aicfs, key=lambda e: e.gas):
      outcomes.append(
          self.check_group(nch, entry.gas, 'AICFs', [
              (f'{entry.gas}_aicf', entry.aicf),
              (f'{entry.gas}_aicf_error', entry.aicf_error),
          ]))
    return _group_result(name, 'AICFs', outcomes, 'gases')


class WindowScaleFactorValidator(FloatValuesValidator):
  """Validate window-to-window scale factors (vsw_sf_<win>)."""

  def validate(self,
               nch: DatasetLike,
               windows: Sequence[WindowEntry],
               name: str = 'window_sf') -> CheckResult:
    outcomes = []
    for window in sorted(windows, key=lambda w: w.name):
      outcomes.append(
          self.check_group(nch, window.name,
                           'window-to-window scale factors',
                           [(f'vsw_sf_{window.name}', window.scale_factor)]))
    return _group_result(name, 'Window-to-window scale factors', outcomes,
                         'windows')
