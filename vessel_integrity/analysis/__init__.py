"""
Analysis modules for the vessel integrity calculation engine.
"""
from .corrosion_rates import (
    calculate_short_term_corrosion_rate,
    calculate_long_term_corrosion_rate,
    select_governing_rate,
)
from .remaining_life import (
    calculate_remaining_life,
    calculate_next_inspection_interval,
)
from .component_calculations import perform_component_calculations
from .aggregation import run_component_aggregation
