"""
Phase 2 reference tables.

The tables are kept in the same layout as the GGG2020 input files they were
taken from so they can be diffed against those files directly:

- ADCF table: airmass-dependent correction factors per window
- AICF table: airmass-independent correction factors per gas
- Windows table: the .gnd window list; lines starting with ':' are windows
  that Phase 2 no longer retrieves

Usage:
  from phase2_check.config.tables import read_adcf_table

  adcfs = read_adcf_table()
  print(adcfs[0].window, adcfs[0].adcf)
"""

from dataclasses import dataclass
import io
import re

import pandas as pd

_ADCF_TABLE = """ Gas         ADCF      ADCF_Err  g    p
"xco2_6220"  -0.00903  0.00025   15   4
"xco2_6339"  -0.00512  0.00025   45   5
"xlco2_4852"  0.00008  0.00018  -45   1
"xwco2_6073" -0.00235  0.00016  -45   1
"xwco2_6500" -0.00970  0.00026   45   5
"xch4_5938"  -0.00971  0.00046   25   4
"xch4_6002"  -0.00602  0.00053  -5    2
"xch4_6076"  -0.00594  0.00044   15   3
"xn2o_4395"   0.00523  0.00054  -5    2
"xn2o_4430"   0.00426  0.00042   13   3
"xn2o_4719"  -0.00267  0.00056  -15   2
"xco_4233"    0.00000  0.00000   13   3
"xco_4290"    0.00000  0.00000   13   3
"xluft_6146"  0.00053  0.00017  -45   1
"""


_AICF_TABLE = """ Gas     AICF  AICF_Err  WMO_Scale
"xco2"   1.0101  0.0005  "WMO CO2 X2007"
"xwco2"  1.0008  0.0005  "WMO CO2 X2007"
"xlco2"  1.0014  0.0007  "WMO CO2 X2007"
"xch4"   1.0031  0.0014  "WMO CH4 X2004"
"xn2o"   0.9822  0.0105  "NOAA 2006A"
"xco"    1.0000  0.0526  "N/A"
"xh2o"   0.9882  0.0157  "N/A"
"xluft"  1.0000  0.0000  "N/A"
"""


_WINDOWS_TABLE = """ Center   Width MIT A I F  Parameters_to_ fit  Bias      Gases_to_fit
6146.90   1.60   0 1 1 0                     sf=1.000 : luft
4038.95   0.32  15 1 1 0  ncbf=2  fs  so     sf=1.000 : hf  h2o
4565.20   2.50  15 1 1 0  ncbf=2  fs  sg     sf=1.006 : h2o  co2 ch4
4570.35   3.10  15 1 1 0  ncbf=2  fs  sg     sf=0.994 : h2o  co2  ch4
4571.75   2.50  15 1 1 0  ncbf=2  fs  so     sf=0.996 : h2o  co2 ch4
4576.85   1.90  15 1 1 0  ncbf=2  fs  so     sf=1.009 : h2o  ch4
4598.69  10.78  20 1 1 0  ncbf=2  fs  sg     sf=1.003 : h2o  ch4  co2  n2o
4611.05   2.20  15 1 1 0  ncbf=2  fs  so     sf=0.993 : h2o  ch4  co2  n2o
4622.00   2.30  15 1 1 0  ncbf=2  fs  so     sf=1.001 : h2o  co2  n2o
4631.55   1.40  20 1 1 0  ncbf=2  fs  so     sf=0.990 : h2o
4699.55   4.00  15 1 1 0  ncbf=2  fs  so     sf=1.001 : h2o  co2  n2o
4734.60   7.30  20 1 1 0  ncbf=2  fs  sg     sf=1.000 : h2o  co2  n2o
4761.15  10.70  20 1 1 0  ncbf=2  fs  so     sf=1.000 : h2o  co2
6076.90   3.85  15 1 1 0  ncbf=2  fs  sg     sf=1.018 : h2o  ch4 hdo co2
6099.35   0.95  15 1 1 0  ncbf=2  fs  so     sf=1.001 : h2o  co2
6125.85   1.45  15 1 1 0  ncbf=2  fs  sg     sf=1.007 : h2o  hdo co2 ch4
:6177.30   0.83  15 1 1 0  ncbf=2  fs  so     sf=1.000 : h2o  hdo co2 ch4
6177.51   1.26  15 1 1 0  ncbf=2  fs  sg     sf=1.005 : h2o  hdo co2 ch4
:6219.00   7.00  15 1 1 0  ncbf=2  fs  so     sf=1.000 : h2o  co2 ch4
:6244.40   7.20  15 1 1 0  ncbf=2  fs  so     sf=1.000 : h2o  co2 hdo
6255.95   3.60  15 1 1 0  ncbf=2  fs  sg  nv sf=0.994 : h2o  co2 hdo
6301.35   7.90  15 1 1 0  ncbf=2  fs  sg     sf=0.999 : h2o  co2 hdo
6392.45   3.10  15 1 1 0  ncbf=2  fs  sg     sf=1.016 : h2o  hdo
6401.15   1.15  15 1 1 0  ncbf=2  fs  sg     sf=1.014 : h2o  hdo co2
6469.60   3.50  15 1 1 0  ncbf=2  fs  sg     sf=0.989 : h2o  co2 hdo
4054.90   3.00  15 1 1 0  ncbf=2  fs  sg     sf=1.020 : th2o  ch4  n2o  hdo  
4255.74   2.82  15 1 1 0  ncbf=2  fs  so     sf=1.005 : th2o  ch4  co  hdo
4325.50   3.02  15 1 1 0  ncbf=2  fs  sg     sf=1.012 : th2o  ch4  co  hdo
4493.90   1.80  15 1 1 0  ncbf=2  fs  so     sf=1.000 : th2o  ch4 
4516.71   2.42  15 1 1 0  ncbf=2  fs  so     sf=1.002 : th2o  ch4
4524.10   2.00  15 1 1 0  ncbf=2  fs  so     sf=0.999 : th2o  ch4  co2 
:4596.65   1.40  15 1 1 0  ncbf=2  fs  so     sf=1.000 : th2o  ch4  co2  n2o   
4633.64   1.82  15 1 1 0  ncbf=2  fs  sg     sf=0.987 : th2o  co2  n2o
4054.60   3.30  15 1 1 0  ncbf=2  fs  sg     sf=0.995 : hdo  h2o  ch4
4067.60   8.80  15 1 1 0  ncbf=2  fs  sg     sf=0.992 : hdo  h2o  ch4
4116.10   8.00  15 1 1 0  ncbf=2  fs  sg     sf=0.992 : hdo  h2o  ch4
4212.45   1.90  15 1 1 0  ncbf=2  fs  so     sf=1.002 : hdo  h2o  ch4
4232.50  11.00  15 1 1 0  ncbf=2  fs  sg     sf=0.996 : hdo  h2o  ch4  co
:4261.70   9.10  15 1 1 0  ncbf=2  fs  sg     sf=1.000 : hdo  h2o  ch4  co
6330.05  45.50  15 1 1 0  ncbf=4  fs  sg     sf=0.990 : hdo  h2o  co2
6377.40  50.20  15 1 1 0  ncbf=4  fs  sg  nv sf=1.009 : hdo  h2o  co2
6458.10  41.40  15 1 1 0  ncbf=4  fs  sg     sf=1.014 : hdo  h2o  co2 
:4233.10  48.40  15 1 1 0  ncbf=3  fs  sg     sf=1.000 : co  ch4 h2o hdo
4290.50  56.60  15 1 1 0  ncbf=4  fs  sg     sf=1.000 : co  ch4 h2o hdo
4395.20  43.40  15 1 1 0  ncbf=4  fs  sg     sf=0.993 : n2o ch4 h2o hdo
4430.10  23.10  15 1 1 0  ncbf=2  fs  sg     sf=0.995 : n2o ch4 h2o hdo co2
4719.50  73.10  15 1 1 0  ncbf=3  fs  sg     sf=1.008 : n2o ch4 h2o co2
5938.00 116.00  15 1 1 0  ncbf=4  fs  sg  nv sf=1.005 : ch4 co2 h2o n2o
6002.00  11.10  15 1 1 0  ncbf=2  fs  sg  nv sf=1.000 : ch4 co2 h2o hdo
6076.00 138.00  15 1 1 0  ncbf=5  fs  sg  nv sf=0.995 : ch4 co2 h2o hdo
:6002.50 268.20  15 1 1 0  ncbf=6  fs  sg  nv sf=1.000 : 2ch4 ch4 co2 h2o hdo
4852.87  86.26  15 1 1 0  ncbf=3  fs  sg  nv sf=1.000 : lco2 2co2 3co2 4co2 h2o hdo 
4852.20  87.60  15 1 1 0  ncbf=3  fs  sg  nv          : zco2 h2o hdo
4852.20  87.60  15 1 1 0  ncbf=3  fs  sg  nv  zo      : zco2 h2o hdo
:2644.35 100.10  15 1 1 0  ncbf=4  fs  sg  cf          : fco2  h2o  hdo  ch4
6154.70  75.50  15 1 1 0  ncbf=4  fs  sg  cf          : fco2 h2o hdo ch4
:12881.20  31.60  15 1 1 0  ncbf=3  fs  sg  cf          : fco2 h2o o2
6073.50  63.40  15 1 1 0  ncbf=2  fs  sg  nv sf=1.000 : wco2 h2o ch4
:6500.40  58.00  15 1 1 0  ncbf=2  fs  sg  nv sf=1.000 : wco2 h2o hdo 
6220.00  80.00  15 1 1 0  ncbf=3  fs  sg  nv sf=1.001 : co2 h2o hdo ch4
6339.50  85.00  15 1 1 0  ncbf=3  fs  sg  nv sf=0.999 : co2 h2o hdo
7885.00 240.00  15 1 1 0  ncbf=5  fs  sg  nv sf=1.000 : o2 0o2 h2o hf co2 hdo
:13082.50 225.00 15 1 1 0  ncbf=2  fs  sg     sf=1.000 : ao2
:14465.00 234.00 15 1 1 0  ncbf=2  fs  sg     sf=1.000 : bo2 h2o    
:5577.30   0.40  15 0 1 0  ncbf=2  fs  so     sf=1.000 : hcl h2o ch4
:5597.80   0.40  15 0 1 0  ncbf=2  fs  so     sf=1.000 : hcl h2o ch4
5625.02   0.29  15 0 1 0  ncbf=2  fs  so     sf=1.002 : hcl h2o ch4
:5642.90   1.50  15 0 1 0  ncbf=2  fs  so     sf=1.000 : hcl h2o ch4
:5683.57   0.36  15 0 1 0  ncbf=2  fs  so     sf=1.000 : hcl h2o
5687.65   1.10  15 0 1 0  ncbf=2  fs  sg     sf=1.001 : hcl h2o ch4
5702.00   0.70  15 0 1 0  ncbf=2  fs  sg     sf=0.989 : hcl h2o ch4
:5706.20   0.50  15 0 1 0  ncbf=2  fs  sg     sf=1.000 : hcl h2o ch4
:5719.12   2.26  15 0 1 0  ncbf=2  fs  sg     sf=1.000 : hcl h2o ch4
5735.05   0.52  15 0 1 0  ncbf=2  fs  sg     sf=0.998 : hcl h2o ch4
5739.25   1.50  15 0 1 0  ncbf=2  fs  sg     sf=1.003 : hcl h2o ch4
:5743.00 125.02  15 0 1 0  ncbf=6  fs  sg  zo sf=1.000 : hcl h2o ch4
:5749.80   0.60  15 0 1 0  ncbf=2  fs  so     sf=1.000 : hcl h2o ch4
:5754.00   0.80  15 0 1 0  ncbf=2  fs  so     sf=1.000 : hcl h2o ch4
:5763.20   0.68  15 0 1 0  ncbf=2  fs  so     sf=1.000 : hcl h2o ch4
:5767.35   1.70  15 0 1 0  ncbf=2  fs  sg     sf=1.000 : hcl h2o ch4
:5779.50   1.00  15 0 1 0  ncbf=2  fs  so     sf=1.000 : hcl h2o ch4 
:5790.45   0.90  15 0 1 0  ncbf=2  fs  so     sf=1.000 : hcl h2o ch4
"""


_SF_RE = re.compile(r'sf=(\d\.\d+)')


@dataclass(frozen=True)
class AdcfEntry:
  """Expected airmass-dependent correction for one window."""
  window: str
  adcf: float
  adcf_error: float
  g: int
  p: int


@dataclass(frozen=True)
class AicfEntry:
  """Expected airmass-independent correction for one gas."""
  gas: str
  aicf: float
  aicf_error: float
  wmo_scale: str


@dataclass(frozen=True)
class WindowEntry:
  """
  One spectral window from the windows table.

  Attributes:
    name: Window name, '<main gas>_<integer center>' (e.g. 'co2_6220')
    center: Window center in cm-1
    main_gas: First gas fitted in the window
    gases: All gases fitted in the window, main gas first
    scale_factor: Expected window-to-window scale factor (1.0 if not set)
  """
  name: str
  center: float
  main_gas: str
  gases: tuple[str, ...]
  scale_factor: float


def _read_whitespace_table(text: str) -> pd.DataFrame:
  """Parse a whitespace-separated table with a header row and quoted names."""
  # 'N/A' is a scale name here, not a missing value
  return pd.read_csv(io.StringIO(text.strip()),
                     sep=r'\s+',
                     quotechar='"',
                     keep_default_na=False)


def read_adcf_table(text: str = _ADCF_TABLE) -> tuple[AdcfEntry, ...]:
  """Parse the ADCF table into entries sorted by window name."""
  df = _read_whitespace_table(text).sort_values('Gas')
  return tuple(
      AdcfEntry(
          window=str(row.Gas),
          adcf=float(row.ADCF),
          adcf_error=float(row.ADCF_Err),
          g=int(row.g),
          p=int(row.p),
      ) for row in df.itertuples(index=False))


def read_aicf_table(text: str = _AICF_TABLE) -> tuple[AicfEntry, ...]:
  """Parse the AICF table into entries sorted by gas name."""
  df = _read_whitespace_table(text).sort_values('Gas')
  return tuple(
      AicfEntry(
          gas=str(row.Gas),
          aicf=float(row.AICF),
          aicf_error=float(row.AICF_Err),
          wmo_scale=str(row.WMO_Scale),
      ) for row in df.itertuples(index=False))


def _parse_window_line(line: str) -> WindowEntry:
  """
  Parse one line of the windows table.

  The part before ':' holds the center, width and fit settings; the part
  after it lists the fitted gases with the main gas first.
  """
  settings, gas_list = line.split(':', 1)
  center_str = settings.split()[0]
  gases = tuple(gas_list.split())
  main_gas = gases[0]

  match = _SF_RE.search(settings)
  scale_factor = float(match.group(1)) if match else 1.0

  return WindowEntry(
      name=f'{main_gas}_{center_str.split(".")[0]}',
      center=float(center_str),
      main_gas=main_gas,
      gases=gases,
      scale_factor=scale_factor,
  )


def read_windows_table(
    text: str = _WINDOWS_TABLE
) -> tuple[tuple[WindowEntry, ...], tuple[str, ...]]:
  """
  Parse the windows table.

  Returns:
    Tuple of (active windows sorted by name, removed window names sorted).
    A removed window whose name is also an active window is not reported as
    removed; those lines were commented out because they conflict with the
    active entry.
  """
  windows: dict[str, WindowEntry] = {}
  removed: list[str] = []

  for line in text.strip().splitlines()[1:]:
    if not line.strip():
      continue
    if line.startswith(':'):
      removed.append(_parse_window_line(line[1:]).name)
    else:
      entry = _parse_window_line(line)
      windows[entry.name] = entry

  removed_names = sorted({name for name in removed if name not in windows})
  return (tuple(windows[name] for name in sorted(windows)),
          tuple(removed_names))
