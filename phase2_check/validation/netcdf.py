"""
netCDF access helpers.

The validators only ever read from the file, and only through these helpers,
so that library errors surface as FileAccessError subclasses with readable
messages instead of raw netCDF/HDF5 error text.

Any object with a netCDF4.Dataset-style read interface (a `variables`
mapping, `ncattrs()` and `getncattr()`) can be passed as the dataset.
"""
import contextlib
import logging
from pathlib import Path
from typing import Any, Iterator, Mapping, Protocol

import netCDF4
import numpy as np

logger = logging.getLogger(__name__)


class DatasetLike(Protocol):
  """Read interface of netCDF4.Dataset used by the validators."""

  variables: Mapping[str, Any]

  def ncattrs(self) -> list[str]:
    ...

  def getncattr(self, name: str) -> Any:
    ...


class FileAccessError(Exception):
  """A variable or attribute could not be read."""


class VariableNotFoundError(FileAccessError, KeyError):
  """The requested variable is not in the file."""

  # KeyError would quote the message
  __str__ = Exception.__str__

  def __init__(self, varname: str):
    super().__init__(f"variable '{varname}' not found")
    self.varname = varname


class AttributeNotFoundError(FileAccessError, KeyError):
  """The requested global attribute is not in the file."""

  __str__ = Exception.__str__

  def __init__(self, attribute: str):
    super().__init__(f"global attribute '{attribute}' not found")
    self.attribute = attribute


class FileOpenError(FileAccessError):
  """The file could not be opened as a netCDF dataset."""


@contextlib.contextmanager
def open_dataset(path: Path) -> Iterator[netCDF4.Dataset]:
  """
  Open a netCDF file read-only for the duration of a with-block.

  Raises:
    FileOpenError: if the file does not exist or is not a netCDF file
  """
  try:
    nch = netCDF4.Dataset(str(path), 'r')
  except OSError as e:
    raise FileOpenError(f'Unable to open {path}: {e}') from e

  logger.debug('Opened %s (%s)', path, nch.data_model)
  try:
    yield nch
  finally:
    nch.close()


def has_variable(nch: DatasetLike, varname: str) -> bool:
  return varname in nch.variables


def read_float_variable(nch: DatasetLike, varname: str) -> np.ndarray:
  """
  Read a numeric variable as a flat float64 array.

  Masked (fill) elements are returned as NaN so they never compare equal
  to an expected value.

  Raises:
    VariableNotFoundError: if the variable is absent
    FileAccessError: if the data cannot be read or is not numeric
  """
  if not has_variable(nch, varname):
    raise VariableNotFoundError(varname)

  try:
    data = nch.variables[varname][...]
  except (OSError, RuntimeError, IndexError) as e:
    raise FileAccessError(f"Could not read variable '{varname}': {e}") from e

  try:
    values = np.ma.filled(np.ma.asarray(data, dtype=np.float64), np.nan)
  except (TypeError, ValueError) as e:
    raise FileAccessError(f"Variable '{varname}' is not numeric: {e}") from e
  return np.ravel(values)


def read_global_attribute(nch: DatasetLike, attribute: str) -> str:
  """
  Read a global attribute as a string.

  Raises:
    AttributeNotFoundError: if the attribute is absent
    FileAccessError: if the attribute cannot be read
  """
  if attribute not in nch.ncattrs():
    raise AttributeNotFoundError(attribute)

  try:
    value = nch.getncattr(attribute)
  except (OSError, RuntimeError, AttributeError) as e:
    raise FileAccessError(
        f"Could not read global attribute '{attribute}': {e}") from e
  return str(value)
