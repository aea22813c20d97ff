"""
EIA API integration for current natural gas prices.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import requests

log = logging.getLogger(__name__)

EIA_GAS_PRICE_URL = "https://api.eia.gov/v2/natural-gas/pri/sum/data/"
THERMS_PER_MCF = 10.37  # Average heat content of 1,000 ft³ of pipeline gas


@dataclass
class GasPriceResult:
    """Result from an EIA residential gas price lookup."""
    price_per_therm: float
    period: Optional[str]
    state_code: str
    success: bool
    error: Optional[str] = None


def mcf_price_to_therm(price_per_mcf: float) -> float:
    """Convert a $/Mcf gas price to $/therm."""
    return price_per_mcf / THERMS_PER_MCF


def _failed(state_code: str, error: str) -> GasPriceResult:
    log.warning("EIA gas price lookup failed for %s: %s", state_code, error)
    return GasPriceResult(
        price_per_therm=0, period=None, state_code=state_code,
        success=False, error=error
    )


def fetch_residential_gas_price(state_code: str, api_key: str) -> GasPriceResult:
    """
    Get the latest monthly residential natural gas price for a state.

    Args:
        state_code: Two-letter state code
        api_key: EIA API key

    Returns:
        GasPriceResult with price in $/therm
    """
    state_code = state_code.upper()
    params = {
        "api_key": api_key,
        "frequency": "monthly",
        "data[0]": "value",
        "facets[duoarea][]": f"S{state_code}",
        "facets[process][]": "PRS",
        "sort[0][column]": "period",
        "sort[0][direction]": "desc",
        "offset": 0,
        "length": 1,
    }

    try:
        response = requests.get(EIA_GAS_PRICE_URL, params=params, timeout=10)
        response.raise_for_status()
        data = response.json()

        rows = data.get('response', {}).get('data', [])
        if not rows:
            return _failed(state_code, "No gas price data available for this state")

        row = rows[0]
        price_per_mcf = float(row['value'])
        log.debug("EIA gas price for %s (%s): $%.2f/Mcf", state_code, row.get('period'), price_per_mcf)

        return GasPriceResult(
            price_per_therm=mcf_price_to_therm(price_per_mcf),
            period=row.get('period'),
            state_code=state_code,
            success=True
        )

    except requests.exceptions.Timeout:
        return _failed(state_code, "Request timed out. Please try again.")
    except requests.exceptions.HTTPError as e:
        error_msg = f"API error: {e.response.status_code}"
        if e.response.status_code == 403:
            error_msg = "API key invalid or quota exceeded"
        return _failed(state_code, error_msg)
    except requests.exceptions.RequestException as e:
        return _failed(state_code, f"Network error: {str(e)}")
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        return _failed(state_code, f"Unexpected response format: {str(e)}")
