"""
Visualization modules for the vessel integrity calculation engine.
"""
from .calculation_viz import create_thickness_margin_chart, create_remaining_life_chart
