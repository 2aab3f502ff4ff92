from pathlib import Path
from typing import Any, Callable, Iterable, Mapping

import netCDF4
import numpy as np
import pytest

from phase2_check.config.reference import ReferenceConfig
from phase2_check.validation.structure import window_variable

N_TIMES = 3


class FakeDataset:
  """In-memory stand-in for the read interface of netCDF4.Dataset."""

  def __init__(self,
               variables: Mapping[str, Any] | None = None,
               attributes: Mapping[str, Any] | None = None):
    self.variables = {
        name: np.ma.asarray(values)
        for name, values in (variables or {}).items()
    }
    self._attributes = dict(attributes or {})

  def ncattrs(self) -> list[str]:
    return list(self._attributes)

  def getncattr(self, name: str) -> Any:
    return self._attributes[name]


def _expected_variables(reference: ReferenceConfig) -> dict[str, np.ndarray]:
  """Helper to build every variable of a correct Phase 2 file."""
  out: dict[str, np.ndarray] = {}

  def put(name: str, value: float) -> None:
    out[name] = np.full(N_TIMES, value, dtype=np.float64)

  for adcf in reference.adcfs:
    put(f'{adcf.window}_adcf', adcf.adcf)
    put(f'{adcf.window}_adcf_error', adcf.adcf_error)
    put(f'{adcf.window}_g', adcf.g)
    put(f'{adcf.window}_p', adcf.p)
  for aicf in reference.aicfs:
    put(f'{aicf.gas}_aicf', aicf.aicf)
    put(f'{aicf.gas}_aicf_error', aicf.aicf_error)
  for window in reference.windows:
    put(f'vsw_sf_{window.name}', window.scale_factor)
    put(window_variable(window.name), 400.0)
  for varname in reference.ingaas_variables:
    put(varname, 1.0)
  return out


@pytest.fixture
def reference() -> ReferenceConfig:
  return ReferenceConfig.phase2()


@pytest.fixture
def phase2_variables(reference: ReferenceConfig) -> dict[str, np.ndarray]:
  """Variables of a correct Phase 2 file (fresh copy per test)."""
  return _expected_variables(reference)


@pytest.fixture
def phase2_attributes(reference: ReferenceConfig) -> dict[str, str]:
  """Global attributes of a correct Phase 2 file."""
  return {p.attribute: p.expected for p in reference.program_versions}


@pytest.fixture
def make_dataset() -> Callable[..., FakeDataset]:
  """Factory for in-memory datasets."""
  return FakeDataset


@pytest.fixture
def phase2_dataset(phase2_variables, phase2_attributes) -> FakeDataset:
  return FakeDataset(phase2_variables, phase2_attributes)


@pytest.fixture
def write_private_file(
    tmp_path: Path, phase2_variables, phase2_attributes
) -> Callable[..., Path]:
  """
  Factory writing a real netCDF4 private file.

  Starts from a correct Phase 2 file; `drop` removes variables, `overrides`
  replaces or adds variables and `attributes` replaces or adds global
  attributes (None deletes one).
  """

  def _write(name: str = 'pa20040721_20041222.private.nc',
             drop: Iterable[str] = (),
             overrides: Mapping[str, Any] | None = None,
             attributes: Mapping[str, str | None] | None = None) -> Path:
    variables = dict(phase2_variables)
    for varname in drop:
      del variables[varname]
    variables.update(overrides or {})

    attrs: dict[str, str | None] = dict(phase2_attributes)
    attrs.update(attributes or {})

    path = tmp_path / name
    with netCDF4.Dataset(str(path), 'w', format='NETCDF4') as nch:
      nch.createDimension('time', N_TIMES)
      for attr, value in attrs.items():
        if value is not None:
          nch.setncattr(attr, value)
      for varname, values in variables.items():
        var = nch.createVariable(varname, 'f4', ('time',))
        var[:] = values
    return path

  return _write
