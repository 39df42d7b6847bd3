"""Calibration kits, HPGL screen plot compilation and chart geometry for HP 8753 network analyzers."""

__version__ = "0.1.0"