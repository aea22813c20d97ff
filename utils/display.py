"""
Formatting helpers for presenting sizing results.
"""

import math
from typing import List, Tuple

import pandas as pd

from .thermal_calcs import SizingResult, SOLAR_COVERAGE_FRACTION, BOILER_EFFICIENCY

MISSING_VALUE = "n/a"

SOLAR_SECTION_TITLE = (
    f"Solar system covers {SOLAR_COVERAGE_FRACTION:.0%} of hot water BTU demand"
)


def format_number(value: float, decimals: int = 0) -> str:
    """Format a number with thousands separators."""
    if value is None or not math.isfinite(value):
        return MISSING_VALUE
    return f"{value:,.{decimals}f}"


def format_currency(value: float) -> str:
    """Format a dollar amount with no cents."""
    if value is None or not math.isfinite(value):
        return MISSING_VALUE
    return f"${value:,.0f}"


def baseline_rows(result: SizingResult) -> List[Tuple[str, str]]:
    """Rows describing hot water demand without solar."""
    return [
        ("Total hot water used per day",
         f"{format_number(result.daily_hot_water_gallons)} gal"),
        ("Daily BTU load (hot water)",
         f"{format_number(result.daily_heat_load_btu)} BTU"),
        (f"Boiler gas input per day ({BOILER_EFFICIENCY:.0%} eff.)",
         f"{format_number(result.daily_boiler_gas_input_btu)} BTU"),
        ("Daily therms consumed", format_number(result.daily_therms_consumed, 2)),
        ("Annual therms consumed", format_number(result.annual_therms_consumed, 0)),
        ("Annual gas cost (baseline)", format_currency(result.annual_baseline_gas_cost)),
    ]


def solar_rows(result: SizingResult) -> List[Tuple[str, str]]:
    """Rows describing the solar system sizing and savings."""
    return [
        (f"Solar BTU load per day ({SOLAR_COVERAGE_FRACTION:.0%})",
         f"{format_number(result.daily_solar_covered_btu)} BTU"),
        (f"Number of panels needed for {SOLAR_COVERAGE_FRACTION:.0%} demand",
         format_number(result.panels_needed_for_solar_fraction)),
        ("Number of panels that fit on roof", format_number(result.panels_fitting_roof)),
        ("Panels to install", format_number(result.panels_to_install)),
        ("Total storage required", f"{format_number(result.thermal_storage_gallons)} gallons"),
        ("Annual dollar saved (panels installed)", format_currency(result.annual_dollar_saved)),
    ]


def results_rows(result: SizingResult) -> List[Tuple[str, str]]:
    """All result rows in display order."""
    return baseline_rows(result) + solar_rows(result)


def results_table(result: SizingResult) -> pd.DataFrame:
    """
    Build a display table of the sizing results.

    Args:
        result: Sizing results to present

    Returns:
        DataFrame with Section, Metric and Value columns
    """
    records = [
        {'Section': 'Baseline', 'Metric': label, 'Value': value}
        for label, value in baseline_rows(result)
    ]
    records += [
        {'Section': 'Solar', 'Metric': label, 'Value': value}
        for label, value in solar_rows(result)
    ]
    return pd.DataFrame(records, columns=['Section', 'Metric', 'Value'])
