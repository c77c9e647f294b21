"""Tests for /calculate endpoint."""
import json
import sys
import pytest

from zakat.constants import GOLD_WEIGHT_GRAMS, SILVER_WEIGHT_GRAMS
from zakat.data.currencies import DEFAULT_EXCHANGE_RATES


class TestCalculateEndpoint:
    """Tests for POST /api/v1/calculate endpoint."""

    def test_calculate_returns_200(self, client):
        """POST /api/v1/calculate returns 200 with valid data."""
        response = client.post('/api/v1/calculate', json={'assets': {'cash': 1000}})
        assert response.status_code == 200

    def test_calculate_returns_result_keys(self, client):
        """Response contains required keys."""
        response = client.post('/api/v1/calculate', json={'assets': {'cash': 1000}})
        data = response.get_json()

        for key in ('total_assets', 'total_liabilities', 'net_assets', 'nisab_threshold',
                    'nisab_percentage', 'is_obligated', 'zakat_due', 'standard',
                    'display_currency', 'formatted', 'rates_last_updated'):
            assert key in data, f"Missing required key: {key}"

    def test_calculate_empty_body(self, client):
        """An empty object uses defaults and owes nothing."""
        response = client.post('/api/v1/calculate', json={})
        data = response.get_json()

        assert response.status_code == 200
        assert data['total_assets'] == 0
        assert data['is_obligated'] is False
        assert data['zakat_due'] == 0
        assert data['nisab_percentage'] == 0
        assert data['standard'] == 'gold'
        assert data['display_currency'] == 'USD'

    def test_above_nisab(self, client):
        """Net assets above the gold threshold owe 2.5%."""
        response = client.post('/api/v1/calculate', json={
            'assets': {'cash': 10000},
            'gold_price': 65,
            'standard': 'gold',
        })
        data = response.get_json()

        assert data['nisab_threshold'] == pytest.approx(65 * GOLD_WEIGHT_GRAMS, abs=0.01)
        assert data['is_obligated'] is True
        assert data['zakat_due'] == 250.0
        assert data['nisab_percentage'] == 100
        assert data['formatted']['zakat_due'] == '$250.00'
        assert data['formatted']['total_assets'] == '$10,000.00'
        assert data['shortfall'] == 0
        assert data['formatted']['shortfall'] == '$0.00'

    def test_below_nisab(self, client):
        response = client.post('/api/v1/calculate', json={
            'assets': {'cash': 3000, 'gold': 2000},
            'gold_price': 65,
        })
        data = response.get_json()

        assert data['is_obligated'] is False
        assert data['zakat_due'] == 0
        assert data['nisab_percentage'] == pytest.approx(5000 / (65 * GOLD_WEIGHT_GRAMS) * 100, abs=0.01)

    def test_liabilities_reduce_base(self, client):
        response = client.post('/api/v1/calculate', json={
            'assets': {'cash': 10000},
            'liabilities': {'short_term_debt': 2000},
            'gold_price': 65,
        })
        data = response.get_json()

        assert data['net_assets'] == 8000.0
        assert data['zakat_due'] == 200.0

    def test_liabilities_exceed_assets(self, client):
        response = client.post('/api/v1/calculate', json={
            'assets': {'cash': 1000},
            'liabilities': {'personal_loans': 5000},
        })
        data = response.get_json()

        assert data['net_assets'] == 0
        assert data['is_obligated'] is False

    def test_silver_standard(self, client):
        response = client.post('/api/v1/calculate', json={
            'assets': {'cash': 1000},
            'silver_price': 0.85,
            'standard': 'silver',
        })
        data = response.get_json()

        assert data['standard'] == 'silver'
        assert data['nisab_threshold'] == pytest.approx(0.85 * SILVER_WEIGHT_GRAMS, abs=0.01)
        assert data['is_obligated'] is True
        assert data['zakat_due'] == 25.0

    def test_nisab_basis_alias(self, client):
        response = client.post('/api/v1/calculate', json={'nisab_basis': 'silver'})
        assert response.get_json()['standard'] == 'silver'

    def test_display_currency_converts_threshold(self, client):
        """Threshold is converted with the stored rate for the display currency."""
        response = client.post('/api/v1/calculate', json={
            'assets': {'cash': 2000000},
            'gold_price': 65,
            'display_currency': 'pkr',
        })
        data = response.get_json()

        assert data['display_currency'] == 'PKR'
        assert data['exchange_rate'] == DEFAULT_EXCHANGE_RATES['PKR']
        assert data['nisab_threshold'] == pytest.approx(
            65 * GOLD_WEIGHT_GRAMS * DEFAULT_EXCHANGE_RATES['PKR'], abs=0.01)
        assert data['formatted']['zakat_due'].startswith('₨')

    def test_request_rates_override_stored(self, client):
        response = client.post('/api/v1/calculate', json={
            'gold_price': 100,
            'display_currency': 'EUR',
            'exchange_rates': {'EUR': 0.5},
        })
        data = response.get_json()

        assert data['exchange_rate'] == 0.5
        assert data['nisab_threshold'] == pytest.approx(100 * GOLD_WEIGHT_GRAMS * 0.5, abs=0.01)

    def test_bad_numbers_count_as_zero(self, client):
        """Non-numeric and negative amounts never cause an error."""
        response = client.post('/api/v1/calculate', json={
            'assets': {'cash': 'lots', 'gold': -500, 'silver': None, 'investments': '1500'},
            'liabilities': {'other': 'abc'},
        })
        data = response.get_json()

        assert response.status_code == 200
        assert data['total_assets'] == 1500.0
        assert data['total_liabilities'] == 0

    def test_invalid_currency_returns_400(self, client):
        response = client.post('/api/v1/calculate', json={'display_currency': 'XYZ'})

        assert response.status_code == 400
        assert response.get_json()['error'] == 'Invalid currency: XYZ'

    def test_currency_with_spaces_accepted(self, client):
        response = client.post('/api/v1/calculate', json={'display_currency': ' eur '})

        assert response.status_code == 200
        assert response.get_json()['display_currency'] == 'EUR'

    def test_blank_currency_uses_default(self, client):
        response = client.post('/api/v1/calculate', json={'display_currency': '  '})

        assert response.status_code == 200
        assert response.get_json()['display_currency'] == 'USD'

    def test_non_string_currency_returns_400(self, client):
        response = client.post('/api/v1/calculate', json={'display_currency': 42})
        assert response.status_code == 400

    def test_huge_amounts_give_strict_json(self, client):
        """Overflowing totals never serialize as Infinity."""
        def reject(constant):
            raise ValueError(constant)

        response = client.post('/api/v1/calculate', json={
            'assets': {'cash': 1e308, 'gold': 1e308},
            'gold_price': 1e306,
            'exchange_rates': {'USD': 1e10},
        })
        data = json.loads(response.get_data(as_text=True), parse_constant=reject)

        assert response.status_code == 200
        assert data['total_assets'] == sys.float_info.max
        assert data['is_obligated'] is True

    def test_non_object_body_returns_400(self, client):
        response = client.post('/api/v1/calculate', data='not json', content_type='application/json')
        assert response.status_code == 400

        response = client.post('/api/v1/calculate', json=[1, 2, 3])
        assert response.status_code == 400

    def test_calculation_remembers_snapshot(self, client):
        client.post('/api/v1/calculate', json={'assets': {'cash': 1234}, 'standard': 'silver'})

        snapshot = client.get('/api/v1/snapshot').get_json()

        assert snapshot['assets']['cash'] == 1234.0
        assert snapshot['standard'] == 'silver'

    def test_remember_false_leaves_snapshot(self, client):
        client.post('/api/v1/calculate', json={'assets': {'cash': 1234}, 'remember': False})

        snapshot = client.get('/api/v1/snapshot').get_json()

        assert snapshot['assets']['cash'] == 0.0
