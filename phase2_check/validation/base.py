"""Base classes and types for the Phase 2 validation framework."""
from dataclasses import dataclass
from typing import Iterable

PASS_SUMMARY_SUFFIX = ('PASSES all tests - it appears to be a correct Phase 2 '
                       'file')
FAIL_SUMMARY_SUFFIX = 'FAILS at least one test - it may be a Phase 1 file'


def _status(ok: bool) -> str:
  return 'PASS' if ok else 'FAIL'


@dataclass(frozen=True)
class Detail:
  """
  One sub-reason of a check result.

  Attributes:
    ok: Whether this part of the check passed
    message: Human-readable description
    level: Minimum verbosity at which the detail is shown
      (2 = per gas/window, 3 = per variable, 4 = per element)
  """
  ok: bool
  message: str
  level: int = 2

  def render(self, category: str) -> str:
    indent = '  ' * (self.level - 1)
    return f'{indent}- {_status(self.ok)} [{category}]: {self.message}'


@dataclass(frozen=True)
class CheckResult:
  """Result of a single top-level check."""

  name: str
  ok: bool
  summary: str
  details: tuple[Detail, ...] = ()

  def __str__(self) -> str:
    return f'* {_status(self.ok)}: {self.summary}'

  def visible_details(self, verbosity: int,
                      failures_only: bool = False) -> list[Detail]:
    """Details shown at the given verbosity."""
    return [
        d for d in self.details
        if d.level <= verbosity and not (failures_only and d.ok)
    ]


def pass_result(name: str, summary: str,
                details: Iterable[Detail] = ()) -> CheckResult:
  """Create a passing CheckResult."""
  return CheckResult(name=name,
                     ok=True,
                     summary=summary,
                     details=tuple(details))


def fail_result(name: str, summary: str,
                details: Iterable[Detail] = ()) -> CheckResult:
  """Create a failing CheckResult."""
  return CheckResult(name=name,
                     ok=False,
                     summary=summary,
                     details=tuple(details))


def make_result(name: str, ok: bool, pass_summary: str, fail_summary: str,
                details: Iterable[Detail] = ()) -> CheckResult:
  """Create a CheckResult, choosing the summary by outcome."""
  summary = pass_summary if ok else fail_summary
  return CheckResult(name=name, ok=ok, summary=summary, details=tuple(details))


@dataclass(frozen=True)
class Report:
  """
  All check results for one file.

  Attributes:
    label: File name shown in the summary line
    results: Check results in display order
  """
  label: str
  results: tuple[CheckResult, ...]

  @property
  def ok(self) -> bool:
    """True if every check passed."""
    return all(r.ok for r in self.results)

  @property
  def failed_checks(self) -> list[CheckResult]:
    return [r for r in self.results if not r.ok]

  def summary_line(self) -> str:
    suffix = PASS_SUMMARY_SUFFIX if self.ok else FAIL_SUMMARY_SUFFIX
    return f'{self.label} {suffix}'

  def lines(self, verbosity: int, failures_only: bool = False) -> list[str]:
    """
    Render the report as text lines.

    Args:
      verbosity: -1 prints nothing, 0 only the summary line, 1 adds one line
        per check, 2 and above add the details at or below that level
      failures_only: Omit passing checks and passing details

    Returns:
      Lines to print, without trailing newlines; a blank line separates the
      check lines from the summary line when any check line is printed
    """
    if verbosity < 0:
      return []

    out: list[str] = []
    if verbosity >= 1:
      for result in self.results:
        if failures_only and result.ok:
          continue
        out.append(str(result))
        for detail in result.visible_details(verbosity, failures_only):
          out.append(detail.render(result.name))
      if out:
        out.append('')

    out.append(self.summary_line())
    return out
