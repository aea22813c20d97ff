import pytest

from utils.display import (
    MISSING_VALUE,
    format_currency,
    format_number,
    results_rows,
    results_table,
)
from utils.thermal_calcs import SizingInput, compute_sizing


@pytest.fixture
def scenario_a():
    return compute_sizing(SizingInput(10, 2, 1000, 2.50))


def test_format_number():
    assert format_number(666400) == "666,400"
    assert format_number(888533.3333) == "888,533"
    assert format_number(8.88533, 2) == "8.89"
    assert format_number(float('nan')) == MISSING_VALUE
    assert format_number(None) == MISSING_VALUE


def test_format_currency():
    assert format_currency(8107.87) == "$8,108"
    assert format_currency(4380.0) == "$4,380"
    assert format_currency(float('inf')) == MISSING_VALUE


def test_results_rows_scenario_a(scenario_a):
    rows = dict(results_rows(scenario_a))
    assert rows["Total hot water used per day"] == "800 gal"
    assert rows["Daily BTU load (hot water)"] == "666,400 BTU"
    assert rows["Boiler gas input per day (75% eff.)"] == "888,533 BTU"
    assert rows["Daily therms consumed"] == "8.89"
    assert rows["Annual therms consumed"] == "3,243"
    assert rows["Annual gas cost (baseline)"] == "$8,108"
    assert rows["Solar BTU load per day (70%)"] == "466,480 BTU"
    assert rows["Number of panels needed for 70% demand"] == "12"
    assert rows["Number of panels that fit on roof"] == "31"
    assert rows["Panels to install"] == "12"
    assert rows["Total storage required"] == "600 gallons"
    assert rows["Annual dollar saved (panels installed)"] == "$4,380"


def test_results_rows_order(scenario_a):
    labels = [label for label, _ in results_rows(scenario_a)]
    assert labels[0] == "Total hot water used per day"
    assert labels[5] == "Annual gas cost (baseline)"
    assert labels[-1] == "Annual dollar saved (panels installed)"
    assert len(labels) == 12


def test_formatting_does_not_change_result(scenario_a):
    before = scenario_a.to_dict()
    results_rows(scenario_a)
    results_table(scenario_a)
    assert scenario_a.to_dict() == before
    assert scenario_a.daily_therms_consumed == pytest.approx(8.88533, abs=1e-5)


def test_results_table_sections(scenario_a):
    table = results_table(scenario_a)
    assert list(table.columns) == ['Section', 'Metric', 'Value']
    assert len(table) == 12
    assert (table['Section'].iloc[:6] == 'Baseline').all()
    assert (table['Section'].iloc[6:] == 'Solar').all()
    assert table.loc[table['Metric'] == 'Panels to install', 'Value'].item() == "12"
