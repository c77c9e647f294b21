"""Zakat calculation service.

Every function here is pure: no I/O, no shared state, and no exceptions for
bad numbers. Malformed amounts count as 0 and missing rates count as 1, so
``compute_zakat`` always returns a finite result.
"""
import math
import sys
from typing import Mapping

from zakat.constants import (
    ASSET_CATEGORIES,
    LIABILITY_CATEGORIES,
    GOLD_WEIGHT_GRAMS,
    SILVER_WEIGHT_GRAMS,
    ZAKAT_RATE,
)
from .fx import get_rate
from .models import (
    AssetSnapshot,
    LiabilitySnapshot,
    MetalPrices,
    NisabStandard,
    CalculationInput,
    CalculationResult,
    Obligation,
    to_amount,
    to_rate,
)


def _finite(value: float) -> float:
    # Sums and products of finite amounts can still overflow
    return value if math.isfinite(value) else sys.float_info.max



def _amount(value) -> float:
    """Like to_amount, but an overflowed total stays the largest float instead of 0."""
    if isinstance(value, float) and value == math.inf:
        return sys.float_info.max
    return to_amount(value)

def _category_values(snapshot, categories: tuple) -> list[float]:
    if isinstance(snapshot, (AssetSnapshot, LiabilitySnapshot)):
        snapshot = snapshot.as_dict()
    if not isinstance(snapshot, Mapping):
        return []
    return [to_amount(snapshot.get(key, 0)) for key in categories]


def sum_assets(assets) -> float:
    """Total of the six asset categories. Accepts a snapshot or a plain dict."""
    return _finite(sum(_category_values(assets, ASSET_CATEGORIES)))


def sum_liabilities(liabilities) -> float:
    """Total of the four liability categories. Accepts a snapshot or a plain dict."""
    return _finite(sum(_category_values(liabilities, LIABILITY_CATEGORIES)))


def net_assets(total_assets: float, total_liabilities: float) -> float:
    """Assets minus liabilities, floored at zero."""
    return max(0.0, _amount(total_assets) - _amount(total_liabilities))


def nisab_threshold(
    standard,
    gold_price_per_gram: float,
    silver_price_per_gram: float,
    exchange_rate: float = 1.0,
) -> float:
    """Nisab threshold in display currency.

    Args:
        standard: NisabStandard (or "gold"/"silver")
        gold_price_per_gram: Gold price in the metal price currency
        silver_price_per_gram: Silver price in the metal price currency
        exchange_rate: Metal price currency -> display currency multiplier

    Returns:
        Metal weight * price * rate. A zero price gives a zero threshold.
    """
    standard = NisabStandard.parse(standard)
    rate = to_rate(exchange_rate)
    if standard == NisabStandard.SILVER:
        return _finite(to_amount(silver_price_per_gram) * SILVER_WEIGHT_GRAMS * rate)
    return _finite(to_amount(gold_price_per_gram) * GOLD_WEIGHT_GRAMS * rate)


def nisab_percentage(net: float, threshold: float) -> float:
    """Progress towards the threshold, clamped to [0, 100]."""
    net = _amount(net)
    threshold = _amount(threshold)
    if threshold == 0:
        return 100.0 if net > 0 else 0.0
    return min(max(net / threshold * 100, 0.0), 100.0)


def evaluate(net: float, threshold: float) -> Obligation:
    """Decide whether zakat is due.

    Meeting the threshold exactly counts as obligated. Once obligated the rate
    applies to the whole net amount, not only the part above the threshold.
    """
    net = _amount(net)
    threshold = _amount(threshold)
    obligated = net >= threshold
    return Obligation(
        is_obligated=obligated,
        zakat_due=net * ZAKAT_RATE if obligated else 0.0,
        nisab_percentage=nisab_percentage(net, threshold),
    )


def compute_zakat(calc_input: CalculationInput) -> CalculationResult:
    """Run the full calculation for one input snapshot."""
    total_assets = sum_assets(calc_input.assets)
    total_liabilities = sum_liabilities(calc_input.liabilities)
    net = net_assets(total_assets, total_liabilities)

    rate = get_rate(calc_input.display_currency, calc_input.exchange_rates)
    threshold = nisab_threshold(
        calc_input.standard,
        calc_input.metal_prices.gold,
        calc_input.metal_prices.silver,
        rate,
    )
    obligation = evaluate(net, threshold)

    return CalculationResult(
        total_assets=total_assets,
        total_liabilities=total_liabilities,
        net_assets=net,
        nisab_threshold=threshold,
        nisab_percentage=obligation.nisab_percentage,
        is_obligated=obligation.is_obligated,
        zakat_due=obligation.zakat_due,
        standard=calc_input.standard,
        display_currency=calc_input.display_currency,
        exchange_rate=rate,
    )


def build_input(body: Mapping | None, exchange_rates: Mapping | None = None, defaults: dict | None = None) -> CalculationInput:
    """Build a CalculationInput from a loosely typed request body.

    Args:
        body: Dict with optional keys assets, liabilities, gold_price,
            silver_price, standard (or nisab_basis), display_currency
            (or currency) and exchange_rates
        exchange_rates: Rate table used when the body carries none
        defaults: Calculation defaults; read from config when omitted

    Returns:
        CalculationInput with every value normalized
    """
    if defaults is None:
        from .config import get_calculation_defaults
        defaults = get_calculation_defaults()
    body = body if isinstance(body, Mapping) else {}

    default_standard = NisabStandard.parse(defaults.get('nisab_standard'))
    standard = NisabStandard.parse(body.get('standard', body.get('nisab_basis')), default_standard)

    currency = body.get('display_currency', body.get('currency'))
    if not isinstance(currency, str) or not currency.strip():
        currency = defaults.get('display_currency', 'USD')

    gold_price = body.get('gold_price')
    if gold_price is None:
        gold_price = defaults.get('gold_price_per_gram', 0)
    silver_price = body.get('silver_price')
    if silver_price is None:
        silver_price = defaults.get('silver_price_per_gram', 0)

    rates = body.get('exchange_rates')
    if not isinstance(rates, Mapping):
        rates = exchange_rates or {}

    return CalculationInput(
        assets=AssetSnapshot.from_dict(body.get('assets')),
        liabilities=LiabilitySnapshot.from_dict(body.get('liabilities')),
        metal_prices=MetalPrices(gold=gold_price, silver=silver_price),
        standard=standard,
        display_currency=currency.strip().upper(),
        exchange_rates={str(k).upper(): v for k, v in rates.items()},
    )
