import netCDF4
import numpy as np
import pytest

from phase2_check.validation.netcdf import AttributeNotFoundError
from phase2_check.validation.netcdf import FileAccessError
from phase2_check.validation.netcdf import FileOpenError
from phase2_check.validation.netcdf import has_variable
from phase2_check.validation.netcdf import open_dataset
from phase2_check.validation.netcdf import read_float_variable
from phase2_check.validation.netcdf import read_global_attribute
from phase2_check.validation.netcdf import VariableNotFoundError


class _UnreadableVariable:

  def __getitem__(self, key):
    raise RuntimeError('NetCDF: HDF error')


@pytest.fixture
def small_file(tmp_path):
  path = tmp_path / 'small.private.nc'
  with netCDF4.Dataset(str(path), 'w') as nch:
    nch.createDimension('time', 3)
    nch.setncattr('apply_tccon_airmass_correction_version', 'v1.38')
    var = nch.createVariable('xco2_aicf', 'f4', ('time',))
    var[:] = np.ma.masked_array([1.0101, 1.0101, 0.0], mask=[0, 0, 1])
    scalar = nch.createVariable('xco2_g', 'i4')
    scalar.assignValue(15)
  return path


class TestOpenDataset:
  """Tests for open_dataset context manager."""

  def test_reads_and_closes(self, small_file):
    with open_dataset(small_file) as nch:
      assert has_variable(nch, 'xco2_aicf')
    assert not nch.isopen()

  def test_closes_on_error(self, small_file):
    with pytest.raises(ValueError):
      with open_dataset(small_file) as nch:
        raise ValueError('boom')
    assert not nch.isopen()

  def test_missing_file(self, tmp_path):
    with pytest.raises(FileOpenError, match='Unable to open'):
      with open_dataset(tmp_path / 'missing.private.nc'):
        pass

  def test_not_a_netcdf_file(self, tmp_path):
    path = tmp_path / 'bogus.private.nc'
    path.write_text('not a netCDF file')

    with pytest.raises(FileOpenError):
      with open_dataset(path):
        pass


class TestReadFloatVariable:
  """Tests for read_float_variable function."""

  def test_masked_values_become_nan(self, small_file):
    with open_dataset(small_file) as nch:
      values = read_float_variable(nch, 'xco2_aicf')

    assert values.dtype == np.float64
    assert values[:2] == pytest.approx([1.0101, 1.0101], abs=1e-6)
    assert np.isnan(values[2])

  def test_scalar_variable(self, small_file):
    with open_dataset(small_file) as nch:
      values = read_float_variable(nch, 'xco2_g')

    assert values.shape == (1,)
    assert values[0] == 15.0

  def test_missing_variable(self, make_dataset):
    with pytest.raises(VariableNotFoundError, match="'xco2_aicf' not found"):
      read_float_variable(make_dataset(), 'xco2_aicf')

  def test_non_numeric_variable(self, make_dataset):
    nch = make_dataset({'xco2_aicf': np.array(['a', 'b'], dtype=object)})

    with pytest.raises(FileAccessError, match='not numeric'):
      read_float_variable(nch, 'xco2_aicf')

  def test_unreadable_variable(self, make_dataset):
    nch = make_dataset()
    nch.variables['xco2_aicf'] = _UnreadableVariable()

    with pytest.raises(FileAccessError, match='HDF error'):
      read_float_variable(nch, 'xco2_aicf')


class TestReadGlobalAttribute:
  """Tests for read_global_attribute function."""

  def test_reads_attribute(self, small_file):
    with open_dataset(small_file) as nch:
      value = read_global_attribute(nch,
                                    'apply_tccon_airmass_correction_version')
    assert value == 'v1.38'

  def test_missing_attribute(self, make_dataset):
    with pytest.raises(AttributeNotFoundError, match='not found'):
      read_global_attribute(make_dataset(), 'write_netcdf_version')

  def test_not_found_errors_are_access_errors(self):
    assert issubclass(VariableNotFoundError, FileAccessError)
    assert issubclass(AttributeNotFoundError, FileAccessError)
    assert issubclass(FileOpenError, FileAccessError)

  def test_not_found_errors_are_key_errors(self, make_dataset):
    with pytest.raises(KeyError) as exc_info:
      read_global_attribute(make_dataset(), 'write_netcdf_version')
    assert str(exc_info.value) == (
        "global attribute 'write_netcdf_version' not found")

    with pytest.raises(KeyError) as exc_info:
      read_float_variable(make_dataset(), 'xco2_aicf')
    assert str(exc_info.value) == "variable 'xco2_aicf' not found"
