"""
Pressure vessel inspection calculations: minimum thickness, MAWP, corrosion
rates, remaining life and per-component aggregation.
"""
__version__ = "0.1.0"
