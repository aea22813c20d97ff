"""
Solar thermal hot-water sizing for multi-unit residential buildings.
Converts occupancy and roof area into baseline gas use, panel count,
storage volume and annual savings.
"""

import math
import re
from dataclasses import dataclass, asdict
from typing import Dict, List, Optional, Union

import numpy as np
import pandas as pd

# Engineering constants
BTU_PER_GALLON = 833  # BTU to heat 1 gal of water
WATER_USE_PER_BEDROOM_GAL = 40  # Gallons per bedroom per day
PANEL_OUTPUT_BTU_PER_DAY = 40000  # BTU/day per panel
PANEL_STORAGE_GAL = 50  # Gallons of storage per panel
PANEL_AREA_SQFT = 32  # ft² per panel
THERM_BTU = 100000
BOILER_EFFICIENCY = 0.75
SOLAR_COVERAGE_FRACTION = 0.70  # System covers 70% of demand
DAYS_PER_YEAR = 365

# Panel ratios are rounded to this many decimals before ceil/floor
PANEL_RATIO_DECIMALS = 9

# Form bounds: (min, max, step)
INPUT_LIMITS = {
    'apartment_count': (1, 500, 1),
    'avg_bedrooms_per_apartment': (0.5, 10.0, 0.1),
    'usable_roof_area_sqft': (32.0, 20000.0, 1.0),
    'gas_cost_per_therm': (0.1, 10.0, 0.01),
}

FIELD_LABELS = {
    'apartment_count': 'Number of apartments',
    'avg_bedrooms_per_apartment': 'Average number of bedrooms per apartment',
    'usable_roof_area_sqft': 'Usable south-facing roof area (ft²)',
    'gas_cost_per_therm': 'Gas cost per therm ($)',
}

Number = Union[int, float]


@dataclass(frozen=True)
class SizingInput:
    """User-supplied building parameters."""
    apartment_count: Number
    avg_bedrooms_per_apartment: float
    usable_roof_area_sqft: float
    gas_cost_per_therm: float


@dataclass(frozen=True)
class SizingResult:
    """Results of a single sizing run."""
    # Baseline (no solar)
    daily_hot_water_gallons: float
    daily_heat_load_btu: float
    daily_boiler_gas_input_btu: float
    daily_therms_consumed: float
    annual_therms_consumed: float
    annual_baseline_gas_cost: float

    # Solar system
    daily_solar_covered_btu: float
    panels_needed_for_solar_fraction: Number
    panels_fitting_roof: Number
    panels_to_install: Number
    thermal_storage_gallons: float
    annual_dollar_saved: float

    @property
    def roof_limited(self) -> bool:
        """True when roof space, not demand, capped the install."""
        return self.panels_fitting_roof < self.panels_needed_for_solar_fraction

    def to_dict(self) -> Dict[str, Number]:
        return asdict(self)


def _panel_count(ratio: float, rounding) -> Number:
    """
    Round a panel ratio to a whole panel count.

    Args:
        ratio: Unrounded number of panels
        rounding: np.ceil or np.floor

    Returns:
        int when the ratio is finite, otherwise the non-finite float
    """
    count = rounding(np.round(ratio, PANEL_RATIO_DECIMALS))
    if np.isfinite(count):
        return int(count)
    return float(count)


def compute_sizing(sizing_input: SizingInput) -> SizingResult:
    """
    Size a solar thermal system and estimate its annual savings.

    No validation is done here. Out-of-range values produce out-of-range
    results and NaN inputs propagate to NaN outputs.

    Args:
        sizing_input: Building parameters

    Returns:
        SizingResult with baseline demand and solar sizing
    """
    gas_cost = sizing_input.gas_cost_per_therm

    # Total hot water demand and BTU
    daily_gallons = (
        sizing_input.apartment_count
        * sizing_input.avg_bedrooms_per_apartment
        * WATER_USE_PER_BEDROOM_GAL
    )
    daily_btu = daily_gallons * BTU_PER_GALLON
    boiler_gas_input = daily_btu / BOILER_EFFICIENCY
    daily_therms = boiler_gas_input / THERM_BTU
    annual_therms = daily_therms * DAYS_PER_YEAR
    annual_gas_cost = annual_therms * gas_cost

    # Solar covers only part of the daily load
    solar_btu_per_day = daily_btu * SOLAR_COVERAGE_FRACTION
    needed_panels = _panel_count(solar_btu_per_day / PANEL_OUTPUT_BTU_PER_DAY, np.ceil)
    max_panels = _panel_count(sizing_input.usable_roof_area_sqft / PANEL_AREA_SQFT, np.floor)
    if math.isnan(needed_panels) or math.isnan(max_panels):
        panels_to_install = float('nan')
    else:
        panels_to_install = min(needed_panels, max_panels)
    storage_gallons = panels_to_install * PANEL_STORAGE_GAL

    # Savings come from installed panels, not needed panels
    annual_solar_btu = panels_to_install * PANEL_OUTPUT_BTU_PER_DAY * DAYS_PER_YEAR
    annual_solar_therms = annual_solar_btu / THERM_BTU
    annual_dollar_saved = annual_solar_therms * gas_cost

    return SizingResult(
        daily_hot_water_gallons=daily_gallons,
        daily_heat_load_btu=daily_btu,
        daily_boiler_gas_input_btu=boiler_gas_input,
        daily_therms_consumed=daily_therms,
        annual_therms_consumed=annual_therms,
        annual_baseline_gas_cost=annual_gas_cost,
        daily_solar_covered_btu=solar_btu_per_day,
        panels_needed_for_solar_fraction=needed_panels,
        panels_fitting_roof=max_panels,
        panels_to_install=panels_to_install,
        thermal_storage_gallons=storage_gallons,
        annual_dollar_saved=annual_dollar_saved
    )


def roof_area_sweep(
    sizing_input: SizingInput,
    max_area_sqft: Optional[float] = None,
    step_sqft: float = PANEL_AREA_SQFT
) -> pd.DataFrame:
    """
    Re-run the sizing over a range of roof areas.

    Args:
        sizing_input: Building parameters (roof area is replaced per row)
        max_area_sqft: Largest roof area to evaluate. Defaults to the area
            that fits every needed panel, or the building's own roof if larger.
        step_sqft: Spacing between evaluated roof areas

    Returns:
        DataFrame with roof_area_sqft, panels_to_install,
        thermal_storage_gallons and annual_dollar_saved columns
    """
    if max_area_sqft is None:
        needed = compute_sizing(sizing_input).panels_needed_for_solar_fraction
        max_area_sqft = max(needed * PANEL_AREA_SQFT, sizing_input.usable_roof_area_sqft)

    areas = np.arange(PANEL_AREA_SQFT, max_area_sqft + step_sqft, step_sqft)
    areas = areas[areas <= max_area_sqft]

    rows = []
    for area in areas:
        result = compute_sizing(SizingInput(
            apartment_count=sizing_input.apartment_count,
            avg_bedrooms_per_apartment=sizing_input.avg_bedrooms_per_apartment,
            usable_roof_area_sqft=float(area),
            gas_cost_per_therm=sizing_input.gas_cost_per_therm
        ))
        rows.append({
            'roof_area_sqft': float(area),
            'panels_to_install': result.panels_to_install,
            'thermal_storage_gallons': result.thermal_storage_gallons,
            'annual_dollar_saved': result.annual_dollar_saved,
        })

    return pd.DataFrame(
        rows,
        columns=['roof_area_sqft', 'panels_to_install',
                 'thermal_storage_gallons', 'annual_dollar_saved']
    )


def _parse_number(value, integer: bool = False) -> Number:
    """Parse the leading number of a form entry, NaN if there is none."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        if integer and math.isfinite(value):
            return int(value)
        return value

    text = '' if value is None else str(value).strip()
    pattern = r'[+-]?\d+' if integer else r'[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?'
    match = re.match(pattern, text)
    if not match:
        return float('nan')
    return int(match.group(0)) if integer else float(match.group(0))


def parse_sizing_input(apartments, bedrooms, roof_area, gas_cost) -> SizingInput:
    """
    Build a SizingInput from raw form entries.

    Apartments are read as a whole number; the rest as decimals.
    Unparseable entries become NaN instead of raising.
    """
    return SizingInput(
        apartment_count=_parse_number(apartments, integer=True),
        avg_bedrooms_per_apartment=_parse_number(bedrooms),
        usable_roof_area_sqft=_parse_number(roof_area),
        gas_cost_per_therm=_parse_number(gas_cost)
    )


def validate_sizing_input(sizing_input: SizingInput) -> List[str]:
    """
    Check a SizingInput against INPUT_LIMITS.

    Args:
        sizing_input: Parsed form entries

    Returns:
        List of error messages, empty when the input is valid
    """
    errors = []
    for field, (min_value, max_value, _step) in INPUT_LIMITS.items():
        value = getattr(sizing_input, field)
        label = FIELD_LABELS[field]

        if not isinstance(value, (int, float)) or isinstance(value, bool) or not math.isfinite(value):
            errors.append(f"{label} must be a number.")
            continue

        if field == 'apartment_count' and value != int(value):
            errors.append(f"{label} must be a whole number.")
            continue

        if value < min_value or value > max_value:
            errors.append(f"{label} must be between {min_value:g} and {max_value:g}.")

    return errors
