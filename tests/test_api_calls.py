import pytest
import requests

from utils import api_calls
from utils.api_calls import THERMS_PER_MCF, fetch_residential_gas_price, mcf_price_to_therm


class FakeResponse:
    def __init__(self, payload=None, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(response=self)

    def json(self):
        return self.payload


@pytest.fixture
def fake_get(monkeypatch):
    calls = []

    def install(response=None, exc=None):
        def _get(url, params=None, timeout=None):
            calls.append({'url': url, 'params': params, 'timeout': timeout})
            if exc is not None:
                raise exc
            return response
        monkeypatch.setattr(api_calls.requests, "get", _get)
        return calls

    return install


def test_mcf_price_to_therm():
    assert mcf_price_to_therm(THERMS_PER_MCF) == pytest.approx(1.0)
    assert mcf_price_to_therm(20.74) == pytest.approx(2.0)


def test_fetch_price_success(fake_get):
    payload = {'response': {'total': 1, 'data': [
        {'period': '2024-06', 'duoarea': 'SMA', 'value': '22.81', 'units': '$/MCF'}
    ]}}
    calls = fake_get(FakeResponse(payload))

    result = fetch_residential_gas_price('ma', 'test-key')

    assert result.success
    assert result.error is None
    assert result.state_code == 'MA'
    assert result.period == '2024-06'
    assert result.price_per_therm == pytest.approx(22.81 / THERMS_PER_MCF)

    params = calls[0]['params']
    assert params['api_key'] == 'test-key'
    assert params['facets[duoarea][]'] == 'SMA'
    assert params['facets[process][]'] == 'PRS'
    assert calls[0]['timeout'] == 10


def test_fetch_price_no_data(fake_get):
    fake_get(FakeResponse({'response': {'total': 0, 'data': []}}))
    result = fetch_residential_gas_price('CT', 'test-key')
    assert not result.success
    assert result.error == "No gas price data available for this state"


def test_fetch_price_timeout(fake_get):
    fake_get(exc=requests.exceptions.Timeout())
    result = fetch_residential_gas_price('CT', 'test-key')
    assert not result.success
    assert "timed out" in result.error


def test_fetch_price_forbidden(fake_get):
    fake_get(FakeResponse(status_code=403))
    result = fetch_residential_gas_price('CT', 'bad-key')
    assert not result.success
    assert result.error == "API key invalid or quota exceeded"


def test_fetch_price_server_error(fake_get):
    fake_get(FakeResponse(status_code=500))
    result = fetch_residential_gas_price('CT', 'test-key')
    assert result.error == "API error: 500"


def test_fetch_price_network_error(fake_get):
    fake_get(exc=requests.exceptions.ConnectionError("refused"))
    result = fetch_residential_gas_price('CT', 'test-key')
    assert not result.success
    assert result.error.startswith("Network error")


def test_fetch_price_malformed_value(fake_get):
    fake_get(FakeResponse({'response': {'data': [{'period': '2024-06', 'value': None}]}}))
    result = fetch_residential_gas_price('NH', 'test-key')
    assert not result.success
    assert result.error.startswith("Unexpected response format")


def test_failed_lookup_is_logged(fake_get, caplog):
    fake_get(exc=requests.exceptions.Timeout())
    with caplog.at_level("WARNING", logger="utils.api_calls"):
        fetch_residential_gas_price('ME', 'test-key')
    assert "EIA gas price lookup failed for ME" in caplog.text
