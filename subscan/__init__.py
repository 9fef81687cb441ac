"""
SubScan - Source Package

A subscription tracker for a single user: record recurring charges,
see what they cost per month and per year, keep it all on local disk.

DESIGN PRINCIPLES:
1. Only valid records are ever admitted
2. Every change is on disk before the call returns
3. Corrupt state is reported, never silently parsed around
4. Totals are always derived, never stored
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "SubScan Team"
