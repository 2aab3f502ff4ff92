'''
Checks that TCCON .private.nc files have been updated to GGG2020 Phase 2.

Usage:
  from phase2_check.validate import validate_file

  report = validate_file('pa20040721_20041222.private.nc')
  print(report.summary_line())

Or from the command line:
  check-phase2 -vv pa20040721_20041222.private.nc
'''

__version__ = '1.0.0'
