"""Utility modules for Solar Thermal Calculator."""

from .api_calls import (
    fetch_residential_gas_price,
    mcf_price_to_therm,
    GasPriceResult
)

from .thermal_calcs import (
    compute_sizing,
    roof_area_sweep,
    parse_sizing_input,
    validate_sizing_input,
    INPUT_LIMITS,
    SizingInput,
    SizingResult
)

from .display import (
    format_number,
    format_currency,
    results_rows,
    results_table
)

from .gas_rates import (
    GAS_RATES,
    STATE_NAMES,
    DEFAULT_GAS_RATE,
    get_gas_rate
)
