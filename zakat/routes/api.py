"""API routes for calculation, currencies and exchange rates."""
from dataclasses import asdict

from flask import Blueprint, jsonify, request, current_app

from zakat.constants import (
    GOLD_WEIGHT_GRAMS,
    SILVER_WEIGHT_GRAMS,
    ZAKAT_RATE,
    METAL_PRICE_CURRENCY,
    ASSET_CATEGORY_LABELS,
    LIABILITY_CATEGORY_LABELS,
)
from zakat.context import get_rate_store, get_store
from zakat.data.currencies import get_ordered_currencies, is_valid_currency
from zakat.services.calc import build_input, compute_zakat
from zakat.services.config import (
    get_calculation_defaults,
    get_default_display_currency,
    is_sync_enabled,
)
from zakat.services.fx import InvalidRateTableError, format_amount
from zakat.services.providers.registry import get_provider_status
from zakat.services.snapshots import load_snapshot, remember_snapshot, clear_snapshot

api_bp = Blueprint('api', __name__)

FORMATTED_FIELDS = ('total_assets', 'total_liabilities', 'net_assets', 'nisab_threshold', 'shortfall', 'zakat_due')


@api_bp.route('/currencies')
def currencies():
    """Return the supported display currencies with symbol and name."""
    currency_list = get_ordered_currencies()
    return jsonify({
        'currencies': currency_list,
        'default': get_default_display_currency(),
        'count': len(currency_list)
    })


@api_bp.route('/constants')
def constants():
    """Return the fixed calculation constants and configured defaults."""
    return jsonify({
        'gold_weight_grams': GOLD_WEIGHT_GRAMS,
        'silver_weight_grams': SILVER_WEIGHT_GRAMS,
        'zakat_rate': ZAKAT_RATE,
        'metal_price_currency': METAL_PRICE_CURRENCY,
        'asset_categories': ASSET_CATEGORY_LABELS,
        'liability_categories': LIABILITY_CATEGORY_LABELS,
        'defaults': get_calculation_defaults(),
    })


@api_bp.route('/calculate', methods=['POST'])
def calculate():
    """Calculate zakat for one input snapshot.

    Request body (all keys optional):
        assets: {cash, gold, silver, investments, business, crypto}
        liabilities: {short_term_debt, long_term_debt_due, personal_loans, other}
        gold_price / silver_price: per gram in USD
        standard: "gold" or "silver"
        display_currency: supported currency code
        exchange_rates: rate table overriding the stored one
        remember: store this snapshot as the last one (default true)

    Bad numbers never cause an error; they count as zero.
    """
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        return jsonify({'error': 'Request body must be a JSON object'}), 400

    currency = body.get('display_currency', body.get('currency'))
    if isinstance(currency, str):
        currency = currency.strip() or None
    if currency is not None and not is_valid_currency(currency):
        return jsonify({'error': f'Invalid currency: {currency}'}), 400

    rate_store = get_rate_store()
    calc_input = build_input(body, exchange_rates=rate_store.rates)
    result = compute_zakat(calc_input)

    if body.get('remember', True):
        remember_snapshot(get_store(), calc_input)

    payload = result.to_dict()
    payload['formatted'] = {
        field: format_amount(getattr(result, field), result.display_currency)
        for field in FORMATTED_FIELDS
    }
    payload['rates_last_updated'] = rate_store.to_dict()['last_updated']
    return jsonify(payload)


@api_bp.route('/snapshot', methods=['GET'])
def get_snapshot():
    """Return the last remembered input snapshot."""
    return jsonify(load_snapshot(get_store()))


@api_bp.route('/snapshot', methods=['DELETE'])
def delete_snapshot():
    """Clear all entered data."""
    snapshot = clear_snapshot(get_store())
    current_app.logger.info("Snapshot cleared")
    return jsonify({'status': 'cleared', 'snapshot': snapshot})


@api_bp.route('/rates', methods=['GET'])
def get_rates():
    """Return the current exchange rate table and its freshness."""
    payload = get_rate_store().to_dict()
    payload['providers'] = get_provider_status()
    return jsonify(payload)


@api_bp.route('/rates', methods=['PUT'])
def put_rates():
    """Save manually entered exchange rates (1 USD = X currency)."""
    body = request.get_json(silent=True)
    rates = body.get('rates', body) if isinstance(body, dict) else body
    try:
        get_rate_store().set_manual_rates(rates)
    except InvalidRateTableError as e:
        return jsonify({
            'error': 'Please enter valid exchange rates (positive numbers) for all currencies',
            'invalid_currencies': e.invalid_codes,
        }), 400
    return jsonify(get_rate_store().to_dict())


@api_bp.route('/rates', methods=['DELETE'])
def reset_rates():
    """Discard fetched and manual rates, returning to the built-in table."""
    rate_store = get_rate_store()
    rate_store.reset()
    current_app.logger.info("Exchange rates reset to defaults")
    return jsonify(rate_store.to_dict())


@api_bp.route('/rates/refresh', methods=['POST'])
def refresh_rates():
    """Refresh exchange rates from the configured provider."""
    if not is_sync_enabled():
        return jsonify({
            'error': 'Network rate refresh is disabled',
            'message': 'Set RATES_ALLOW_NETWORK=1 to enable'
        }), 503

    rate_store = get_rate_store()
    result = rate_store.refresh()
    if result.used_fallback:
        current_app.logger.warning(f"Rate refresh fell back to defaults: {result.error_message}")

    payload = rate_store.to_dict()
    payload['refresh'] = asdict(result)
    return jsonify(payload)
