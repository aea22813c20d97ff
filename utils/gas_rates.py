"""
State-specific residential natural gas prices for New England.
"""

# Average residential natural gas prices ($/therm) - as of 2024
# Source: EIA Natural Gas Prices by state, converted from $/Mcf
GAS_RATES = {
    'MA': 2.05,  # Massachusetts
    'CT': 2.10,  # Connecticut
    'RI': 2.15,  # Rhode Island
    'NH': 2.00,  # New Hampshire
    'VT': 1.70,  # Vermont
    'ME': 2.25,  # Maine - highest in region
}

# State names for display
STATE_NAMES = {
    'MA': 'Massachusetts',
    'CT': 'Connecticut',
    'RI': 'Rhode Island',
    'NH': 'New Hampshire',
    'VT': 'Vermont',
    'ME': 'Maine',
}

DEFAULT_GAS_RATE = 2.00  # $/therm regional fallback


def get_gas_rate(state_code: str) -> float:
    """Get residential gas price for a state, with fallback to regional average."""
    return GAS_RATES.get(state_code.upper(), DEFAULT_GAS_RATE)
