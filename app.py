"""
Solar Thermal Calculator
Streamlit application for sizing solar hot water systems on multi-unit buildings.
"""

import logging
import os
from enum import Enum

import streamlit as st
import plotly.graph_objects as go

# Import utility modules
from utils.api_calls import fetch_residential_gas_price
from utils.display import (
    SOLAR_SECTION_TITLE,
    baseline_rows,
    solar_rows,
    format_currency,
    results_table
)
from utils.gas_rates import STATE_NAMES, get_gas_rate
from utils.thermal_calcs import (
    INPUT_LIMITS,
    FIELD_LABELS,
    SOLAR_COVERAGE_FRACTION,
    BOILER_EFFICIENCY,
    BTU_PER_GALLON,
    WATER_USE_PER_BEDROOM_GAL,
    PANEL_OUTPUT_BTU_PER_DAY,
    PANEL_STORAGE_GAL,
    PANEL_AREA_SQFT,
    compute_sizing,
    parse_sizing_input,
    roof_area_sweep,
    validate_sizing_input
)

log = logging.getLogger(__name__)

# Page configuration
st.set_page_config(
    page_title="Solar Thermal Calculator",
    page_icon="🛁",
    layout="centered"
)


class ViewMode(Enum):
    ENTRY = "entry"
    RESULTS = "results"


class GasPriceUnavailable(Exception):
    """Raised for failed EIA lookups so st.cache_data does not keep them."""


def get_api_key():
    """Get EIA API key from Streamlit secrets or environment variable."""
    # Try Streamlit secrets first (for deployment)
    try:
        return st.secrets["EIA_API_KEY"]
    except (KeyError, FileNotFoundError):
        pass

    # Fall back to environment variable; no key means state defaults are used
    return os.environ.get("EIA_API_KEY")


@st.cache_data(ttl=24 * 60 * 60, show_spinner=False)
def lookup_gas_price(state_code: str, api_key: str):
    """Cached EIA gas price lookup. Only successful lookups are cached."""
    result = fetch_residential_gas_price(state_code, api_key)
    if not result.success:
        raise GasPriceUnavailable(result.error)
    return result


def default_gas_cost(state_code: str) -> float:
    """Gas cost to pre-fill: live EIA price when available, else state average."""
    api_key = get_api_key()
    if api_key:
        try:
            result = lookup_gas_price(state_code, api_key)
        except GasPriceUnavailable as e:
            log.info("Falling back to default gas rate for %s: %s", state_code, e)
        else:
            st.session_state.gas_price_source = f"EIA residential price, {result.period}"
            return round(result.price_per_therm, 2)

    st.session_state.gas_price_source = "State average"
    return get_gas_rate(state_code)


def initialize_session_state():
    """Initialize session state variables."""
    defaults = {
        'mode': ViewMode.ENTRY.value,
        'state_code': 'MA',
        'gas_price_source': '',
        'sizing_input': None,
        'results': None,
    }
    for key, value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = value


def reset():
    """Discard the current input and results and return to the form."""
    st.session_state.sizing_input = None
    st.session_state.results = None
    st.session_state.mode = ViewMode.ENTRY.value


def limit_kwargs(field: str) -> dict:
    min_value, max_value, step = INPUT_LIMITS[field]
    return {'min_value': min_value, 'max_value': max_value, 'step': step}


def render_entry_form():
    """Input form for building parameters."""
    state_code = st.selectbox(
        "State",
        options=list(STATE_NAMES.keys()),
        index=list(STATE_NAMES.keys()).index(st.session_state.state_code),
        format_func=lambda x: f"{STATE_NAMES[x]} ({x})",
        help="Used to pre-fill the gas cost"
    )
    st.session_state.state_code = state_code
    min_cost, max_cost, _step = INPUT_LIMITS['gas_cost_per_therm']
    gas_default = min(max(default_gas_cost(state_code), min_cost), max_cost)

    with st.form("sizing_form"):
        apartments = st.number_input(
            FIELD_LABELS['apartment_count'],
            value=None,
            **limit_kwargs('apartment_count')
        )
        bedrooms = st.number_input(
            FIELD_LABELS['avg_bedrooms_per_apartment'],
            value=None,
            format="%.1f",
            **limit_kwargs('avg_bedrooms_per_apartment')
        )
        roof_area = st.number_input(
            FIELD_LABELS['usable_roof_area_sqft'],
            value=None,
            format="%.0f",
            **limit_kwargs('usable_roof_area_sqft')
        )
        gas_cost = st.number_input(
            FIELD_LABELS['gas_cost_per_therm'],
            value=float(gas_default),
            format="%.2f",
            placeholder="e.g. 2.50",
            help=st.session_state.gas_price_source,
            **limit_kwargs('gas_cost_per_therm')
        )
        submitted = st.form_submit_button("Calculate", type="primary", width="stretch")

    if not submitted:
        return

    sizing_input = parse_sizing_input(apartments, bedrooms, roof_area, gas_cost)
    errors = validate_sizing_input(sizing_input)
    if errors:
        for error in errors:
            st.error(error)
        return

    st.session_state.sizing_input = sizing_input
    st.session_state.results = compute_sizing(sizing_input)
    st.session_state.mode = ViewMode.RESULTS.value
    st.rerun()


def render_rows(rows):
    for label, value in rows:
        st.markdown(f"**{label}:** {value}")


def render_results():
    """Results view with baseline, solar sizing and charts."""
    results = st.session_state.results
    sizing_input = st.session_state.sizing_input

    st.subheader("Results")

    col1, col2, col3 = st.columns(3)
    col1.metric("Panels to Install", f"{results.panels_to_install}")
    col2.metric("Storage", f"{results.thermal_storage_gallons:,.0f} gal")
    col3.metric("Annual Savings", format_currency(results.annual_dollar_saved))

    if results.roof_limited:
        st.warning(
            f"Roof space limits the system to {results.panels_fitting_roof} panels; "
            f"{results.panels_needed_for_solar_fraction} are needed to cover "
            f"{SOLAR_COVERAGE_FRACTION:.0%} of demand."
        )

    with st.container(border=True):
        render_rows(baseline_rows(results))
        st.markdown(f":blue[**{SOLAR_SECTION_TITLE}:**]")
        render_rows(solar_rows(results))

    with st.expander("Results table"):
        st.dataframe(results_table(results), hide_index=True, width="stretch")

    st.subheader("📊 Annual Gas Cost")

    remaining = results.annual_baseline_gas_cost - results.annual_dollar_saved
    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=["Without solar", "With solar"],
        y=[results.annual_baseline_gas_cost, max(remaining, 0)],
        marker_color=['#9ca3af', '#2563eb'],
        text=[format_currency(results.annual_baseline_gas_cost), format_currency(max(remaining, 0))],
        textposition='auto'
    ))
    fig.update_layout(yaxis_title="Annual Gas Cost ($)", height=350)
    st.plotly_chart(fig, width="stretch")

    st.subheader("📈 Savings vs. Roof Area")

    sweep = roof_area_sweep(sizing_input)
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=sweep['roof_area_sqft'],
        y=sweep['annual_dollar_saved'],
        mode='lines',
        name='Annual Savings',
        line=dict(color='green', width=3, shape='hv')
    ))
    fig.add_vline(x=sizing_input.usable_roof_area_sqft, line_dash="dash", line_color="red",
                  annotation_text="Your roof")
    fig.update_layout(
        xaxis_title="Usable Roof Area (ft²)",
        yaxis_title="Annual Savings ($)",
        hovermode='x unified',
        height=350
    )
    st.plotly_chart(fig, width="stretch")

    if st.button("🔄 Start Over", width="stretch"):
        reset()
        st.rerun()


def main():
    """Main application entry point."""

    # Initialize session state
    initialize_session_state()

    # Sidebar
    with st.sidebar:
        st.title("🛁 Solar Thermal")
        st.markdown("### Assumptions")
        st.markdown(f"""
        - {WATER_USE_PER_BEDROOM_GAL} gal of hot water per bedroom per day
        - {BTU_PER_GALLON} BTU to heat one gallon
        - Boiler efficiency: {BOILER_EFFICIENCY:.0%}
        - Panel output: {PANEL_OUTPUT_BTU_PER_DAY:,} BTU/day
        - Panel footprint: {PANEL_AREA_SQFT} ft²
        - Storage: {PANEL_STORAGE_GAL} gal per panel
        """)

    # Main content
    st.title("🛁 Solar Thermal Calculator")
    st.caption(
        f"Sizing assumes system covers {SOLAR_COVERAGE_FRACTION:.0%} "
        "of building hot water needs."
    )

    if st.session_state.mode == ViewMode.RESULTS.value and st.session_state.results is not None:
        render_results()
    else:
        render_entry_form()


if __name__ == "__main__":
    main()
