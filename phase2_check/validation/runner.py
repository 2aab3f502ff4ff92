"""
Validation runner with reporting.

Orchestrates the top-level checks for one file and provides consistent
output formatting. A check that raises is recorded as a failure of that
check only; the remaining checks still run.
"""
from dataclasses import dataclass
import logging
from typing import Any, Callable

from phase2_check.validation.base import CheckResult
from phase2_check.validation.base import Detail
from phase2_check.validation.base import fail_result
from phase2_check.validation.base import Report
from phase2_check.validation.netcdf import FileAccessError

logger = logging.getLogger(__name__)

ValidatorFn = Callable[..., CheckResult]


@dataclass
class _RegisteredCheck:
  """Internal representation of a registered check."""

  check_id: str
  description: str
  validator_fn: ValidatorFn
  args: tuple[Any, ...]
  kwargs: dict[str, Any]


class ValidationRunner:
  """
  Run the top-level checks for one file and report results.

  Usage:
    runner = ValidationRunner('pa20040721_20041222.private.nc')
    runner.add_check('adcf', 'ADCFs', AdcfValidator(tol).validate, nch, adcfs)

    report = runner.run()
    runner.print_report(verbosity=1)
  """

  def __init__(self, label: str):
    self.label = label
    self._registered: list[_RegisteredCheck] = []
    self.results: list[CheckResult] = []

  def add_check(
      self,
      check_id: str,
      description: str,
      validator_fn: ValidatorFn,
      *args: Any,
      **kwargs: Any,
  ) -> None:
    """
    Register a check.

    Args:
      check_id: Category tag for this check (shown in detail lines)
      description: What the check covers, used if it raises
      validator_fn: Function that returns a CheckResult
      *args: Positional arguments for validator_fn
      **kwargs: Keyword arguments for validator_fn
    """
    self._registered.append(
        _RegisteredCheck(check_id, description, validator_fn, args, kwargs))

  def run(self) -> Report:
    """
    Execute all registered checks.

    Returns:
      Report with one CheckResult per registered check, in order
    """
    self.results = []

    for reg in self._registered:
      logger.debug('Running check %s', reg.check_id)
      try:
        result = reg.validator_fn(*reg.args, **reg.kwargs)
      except FileAccessError as e:
        logger.debug('Check %s hit a file access error', reg.check_id,
                     exc_info=True)
        result = fail_result(reg.check_id,
                             f'{reg.description} could not be checked',
                             [Detail(False, f'I/O error: {e}')])
      except Exception as e:  # pylint: disable=broad-except
        logger.debug('Check %s raised', reg.check_id, exc_info=True)
        message = f'Exception: {type(e).__name__}: {e}'
        result = fail_result(reg.check_id,
                             f'{reg.description} could not be checked',
                             [Detail(False, message)])
      self.results.append(result)

    return self.report

  @property
  def report(self) -> Report:
    return Report(label=self.label, results=tuple(self.results))

  def print_report(self, verbosity: int, failures_only: bool = False) -> None:
    """
    Print the report to stdout.

    Args:
      verbosity: Detail level; negative values print nothing
      failures_only: Omit passing checks and passing details
    """
    for line in self.report.lines(verbosity, failures_only):
      print(line)

  def log_summary(self) -> None:
    """Log validation summary using logger."""
    checks_passed = sum(1 for r in self.results if r.ok)

    logger.info('%s: %d/%d checks passed', self.label, checks_passed,
                len(self.results))

    for result in self.results:
      level = logging.INFO if result.ok else logging.WARNING
      logger.log(level, '%s: %s', result.name, result)

  @property
  def all_passed(self) -> bool:
    """Return True if all checks passed."""
    return all(r.ok for r in self.results)
