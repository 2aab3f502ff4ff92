"""
Per-window variables expected for the InGaAs detector.

Every window retrieved from InGaAs spectra contributes one set of fit
diagnostics plus the column/VSF variables of each gas fitted in it.
"""

from typing import Iterable

from phase2_check.config.tables import WindowEntry

# Approximate spectral coverage of the InGaAs detector, cm-1
INGAAS_RANGE = (3800.0, 10000.0)

WINDOW_SUFFIXES = ('nit', 'cl', 'ct', 'cc', 'fs', 'sg', 'zo', 'rmsocl',
                   'zpres', 'am')
GAS_TEMPLATES = ('{win}_ovc_{gas}', '{win}_vsf_{gas}', '{win}_vsf_{gas}_error')


def is_ingaas_window(window: WindowEntry) -> bool:
  """Return True if the window center falls in the InGaAs range."""
  low, high = INGAAS_RANGE
  return low <= window.center < high


def ingaas_variables(windows: Iterable[WindowEntry]) -> tuple[str, ...]:
  """
  Build the list of InGaAs per-window variable names.

  Args:
    windows: Active windows; non-InGaAs windows are ignored

  Returns:
    Variable names in window order, without duplicates
  """
  names: dict[str, None] = {}
  for window in windows:
    if not is_ingaas_window(window):
      continue
    for suffix in WINDOW_SUFFIXES:
      names[f'{window.name}_{suffix}'] = None
    for gas in window.gases:
      for template in GAS_TEMPLATES:
        names[template.format(win=window.name, gas=gas)] = None
  return tuple(names)
