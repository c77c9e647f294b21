"""Supported display currencies and the built-in fallback rate table.

Order of SUPPORTED_CURRENCIES is the display order: USD first (the metal
price currency), then the currencies most used by the app's audience.
"""

DEFAULT_CURRENCY = 'USD'

# Format: code -> (symbol, name, minor_unit)
SUPPORTED_CURRENCIES: dict[str, tuple[str, str, int]] = {
    'USD': ('$', 'US Dollar', 2),
    'EUR': ('€', 'Euro', 2),
    'GBP': ('£', 'British Pound', 2),
    'SAR': ('﷼', 'Saudi Riyal', 2),
    'AED': ('د.إ', 'UAE Dirham', 2),
    'EGP': ('E£', 'Egyptian Pound', 2),
    'TRY': ('₺', 'Turkish Lira', 2),
    'PKR': ('₨', 'Pakistani Rupee', 2),
    'INR': ('₹', 'Indian Rupee', 2),
    'MYR': ('RM', 'Malaysian Ringgit', 2),
    'IDR': ('Rp', 'Indonesian Rupiah', 2),
    'BDT': ('৳', 'Bangladeshi Taka', 2),
    'NGN': ('₦', 'Nigerian Naira', 2),
    'ZAR': ('R', 'South African Rand', 2),
    'KES': ('KSh', 'Kenyan Shilling', 2),
    'GHS': ('₵', 'Ghanaian Cedi', 2),
    'TZS': ('TSh', 'Tanzanian Shilling', 2),
    'UGX': ('USh', 'Ugandan Shilling', 0),
    'MAD': ('DH', 'Moroccan Dirham', 2),
    'ETB': ('Br', 'Ethiopian Birr', 2),
}

# Approximate rates (1 USD = X currency), used when no provider is reachable
DEFAULT_EXCHANGE_RATES: dict[str, float] = {
    'USD': 1.0,
    'EUR': 0.92,
    'GBP': 0.79,
    'SAR': 3.75,
    'AED': 3.67,
    'EGP': 48.50,
    'TRY': 32.50,
    'PKR': 278.00,
    'INR': 83.00,
    'MYR': 4.70,
    'IDR': 15600.0,
    'BDT': 110.00,
    'NGN': 1400.0,
    'ZAR': 18.50,
    'KES': 155.00,
    'GHS': 15.00,
    'TZS': 2500.0,
    'UGX': 3700.0,
    'MAD': 10.00,
    'ETB': 55.00,
}


def get_default_rates() -> dict[str, float]:
    """Return a fresh copy of the built-in rate table."""
    return dict(DEFAULT_EXCHANGE_RATES)


def get_ordered_currencies() -> list[dict]:
    """Return supported currencies in display order.

    Returns:
        List of dicts with keys: code, symbol, name, minor_unit
    """
    return [
        {
            'code': code,
            'symbol': symbol,
            'name': name,
            'minor_unit': minor_unit,
        }
        for code, (symbol, name, minor_unit) in SUPPORTED_CURRENCIES.items()
    ]


def get_currency_codes() -> list[str]:
    """Return all supported currency codes in display order."""
    return list(SUPPORTED_CURRENCIES.keys())


def is_valid_currency(code) -> bool:
    """Check if a currency code is supported."""
    if not isinstance(code, str):
        return False
    return code.upper() in SUPPORTED_CURRENCIES


def get_currency_info(code: str) -> dict | None:
    """Get currency info by code."""
    code = code.upper()
    if code not in SUPPORTED_CURRENCIES:
        return None
    symbol, name, minor_unit = SUPPORTED_CURRENCIES[code]
    return {
        'code': code,
        'symbol': symbol,
        'name': name,
        'minor_unit': minor_unit,
    }
