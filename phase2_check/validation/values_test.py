import numpy as np
import pytest

from phase2_check.config.reference import Tolerance
from phase2_check.config.tables import AdcfEntry
from phase2_check.config.tables import AicfEntry
from phase2_check.config.tables import WindowEntry
from phase2_check.validation.values import AdcfValidator
from phase2_check.validation.values import AicfValidator
from phase2_check.validation.values import FloatValuesValidator
from phase2_check.validation.values import WindowScaleFactorValidator

CO2_ADCF = AdcfEntry(window='xco2_6220',
                     adcf=-0.00903,
                     adcf_error=0.00025,
                     g=15,
                     p=4)
CO2_AICF = AicfEntry(gas='xco2',
                     aicf=1.0101,
                     aicf_error=0.0005,
                     wmo_scale='WMO CO2 X2007')
LUFT_WINDOW = WindowEntry(name='luft_6146',
                          center=6146.9,
                          main_gas='luft',
                          gases=('luft',),
                          scale_factor=1.0)


def _adcf_variables(**overrides) -> dict[str, list[float]]:
  variables = {
      'xco2_6220_adcf': [-0.00903] * 3,
      'xco2_6220_adcf_error': [0.00025] * 3,
      'xco2_6220_g': [15.0] * 3,
      'xco2_6220_p': [4.0] * 3,
  }
  variables.update(overrides)
  return variables


class TestFloatValuesValidator:
  """Tests for element-wise float comparison."""

  def test_values_within_tolerance_pass(self, make_dataset):
    """Re-serialization rounding must not fail the check."""
    nch = make_dataset({'vsw_sf_luft_6146': [1.0000001, 1.0, 0.9999999]})

    ok, details = FloatValuesValidator().check_variable(
        nch, 'vsw_sf_luft_6146', 1.000000)

    assert ok
    assert details[0].ok

  def test_float32_storage_passes(self, make_dataset):
    nch = make_dataset(
        {'xco2_6220_adcf': np.full(4, -0.00903, dtype=np.float32)})

    ok, _ = FloatValuesValidator().check_variable(nch, 'xco2_6220_adcf',
                                                 -0.00903)
    assert ok

  def test_mismatch_counts(self, make_dataset):
    nch = make_dataset({'xco2_aicf': [1.0101, 1.0052, 1.0101]})

    ok, details = FloatValuesValidator().check_variable(
        nch, 'xco2_aicf', 1.0101)

    assert not ok
    assert details[0].level == 3
    assert details[0].message == (
        '1/3 (33.33%) of xco2_aicf have incorrect values')
    assert details[1].level == 4
    assert details[1].message == 'xco2_aicf[1] = 1.0052, expected 1.0101'

  def test_element_details_are_capped(self, make_dataset):
    nch = make_dataset({'xco2_aicf': np.zeros(20)})

    _, details = FloatValuesValidator().check_variable(nch, 'xco2_aicf',
                                                       1.0101)

    assert '20/20 (100.00%)' in details[0].message
    assert len([d for d in details if d.level == 4]) == 5

  def test_masked_values_fail(self, make_dataset):
    values = np.ma.masked_array([1.0101, 1.0101], mask=[False, True])
    nch = make_dataset({'xco2_aicf': values})

    ok, details = FloatValuesValidator().check_variable(
        nch, 'xco2_aicf', 1.0101)

    assert not ok
    assert details[0].message.startswith('1/2')

  def test_missing_variable(self, make_dataset):
    ok, details = FloatValuesValidator().check_variable(
        make_dataset(), 'xco2_aicf', 1.0101)

    assert not ok
    assert len(details) == 1
    assert details[0].message == "variable 'xco2_aicf' not found"

  def test_non_numeric_variable(self, make_dataset):
    nch = make_dataset({'xco2_aicf': np.array(['n/a'] * 3, dtype=object)})

    ok, details = FloatValuesValidator().check_variable(
        nch, 'xco2_aicf', 1.0101)

    assert not ok
    assert len(details) == 1
    assert details[0].level == 3
    assert details[0].message.startswith(
        "I/O error: Variable 'xco2_aicf' is not numeric")

  def test_custom_tolerance(self, make_dataset):
    nch = make_dataset({'xco2_aicf': [1.0102]})
    strict = FloatValuesValidator(Tolerance(rtol=0.0, atol=1e-6))
    loose = FloatValuesValidator(Tolerance(rtol=0.0, atol=1e-3))

    assert not strict.check_variable(nch, 'xco2_aicf', 1.0101)[0]
    assert loose.check_variable(nch, 'xco2_aicf', 1.0101)[0]


class TestAdcfValidator:
  """Tests for AdcfValidator."""

  def test_correct_values(self, make_dataset):
    result = AdcfValidator().validate(make_dataset(_adcf_variables()),
                                      [CO2_ADCF])

    assert result.ok
    assert result.name == 'adcf'
    assert result.summary == 'ADCFs match expected values'
    assert result.details[0].message == 'xco2_6220 ADCFs are correct'

  def test_phase1_value_fails(self, make_dataset):
    nch = make_dataset(_adcf_variables(xco2_6220_adcf=[-0.0068] * 3))

    result = AdcfValidator().validate(nch, [CO2_ADCF])

    assert not result.ok
    assert result.summary == (
        'ADCFs do not match expected values (1/1 windows)')
    messages = [d.message for d in result.details]
    assert 'xco2_6220 ADCFs are incorrect' in messages
    assert '3/3 (100.00%) of xco2_6220_adcf have incorrect values' in messages

  def test_missing_g_variable(self, make_dataset):
    variables = _adcf_variables()
    del variables['xco2_6220_g']

    result = AdcfValidator().validate(make_dataset(variables), [CO2_ADCF])

    assert not result.ok
    assert any(d.message == "variable 'xco2_6220_g' not found"
               for d in result.details)

  def test_windows_sorted(self, make_dataset):
    other = AdcfEntry(window='xch4_5938', adcf=-0.00971, adcf_error=0.00046,
                      g=25, p=4)

    result = AdcfValidator().validate(make_dataset(_adcf_variables()),
                                      [CO2_ADCF, other])

    group_details = [d.message for d in result.details if d.level == 2]
    assert group_details == [
        'xch4_5938 ADCFs are incorrect', 'xco2_6220 ADCFs are correct'
    ]


class TestAicfValidator:
  """Tests for AicfValidator."""

  def test_correct_values(self, make_dataset):
    nch = make_dataset({
        'xco2_aicf': [1.0101, 1.0101],
        'xco2_aicf_error': [0.0005, 0.0005],
    })

    result = AicfValidator().validate(nch, [CO2_AICF])

    assert result.ok
    assert result.summary == 'AICFs match expected values'

  def test_error_mismatch(self, make_dataset):
    nch = make_dataset({
        'xco2_aicf': [1.0101],
        'xco2_aicf_error': [0.0010],
    })

    result = AicfValidator().validate(nch, [CO2_AICF])

    assert not result.ok
    assert result.summary.endswith('(1/1 gases)')
    assert any('xco2_aicf_error' in d.message and not d.ok
               for d in result.details)

  def test_non_numeric_variable_fails(self, make_dataset):
    nch = make_dataset({
        'xco2_aicf': np.array(['n/a'], dtype=object),
        'xco2_aicf_error': [0.0005],
    })

    result = AicfValidator().validate(nch, [CO2_AICF])

    assert not result.ok
    assert result.summary.endswith('(1/1 gases)')
    assert any(d.message.startswith('I/O error:') for d in result.details)


class TestWindowScaleFactorValidator:
  """Tests for WindowScaleFactorValidator."""

  def test_correct_values(self, make_dataset):
    nch = make_dataset({'vsw_sf_luft_6146': [1.0, 1.0]})

    result = WindowScaleFactorValidator().validate(nch, [LUFT_WINDOW])

    assert result.ok
    assert result.summary == (
        'Window-to-window scale factors match expected values')

  @pytest.mark.parametrize('stored', [[1.01, 1.01], [np.nan, 1.0]])
  def test_incorrect_values(self, make_dataset, stored):
    nch = make_dataset({'vsw_sf_luft_6146': stored})

    result = WindowScaleFactorValidator().validate(nch, [LUFT_WINDOW])

    assert not result.ok
    assert result.details[0].message == (
        'luft_6146 window-to-window scale factors are incorrect')

  def test_missing_variable_does_not_raise(self, make_dataset):
    result = WindowScaleFactorValidator().validate(make_dataset(),
                                                   [LUFT_WINDOW])

    assert not result.ok
    assert result.details[1].message == (
        "variable 'vsw_sf_luft_6146' not found")
