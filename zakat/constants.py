"""Shared constants for zakat calculation."""

# Nisab weights (grams of pure metal)
GOLD_WEIGHT_GRAMS = 87.48
SILVER_WEIGHT_GRAMS = 612.36

# Zakat rate (2.5%)
ZAKAT_RATE = 0.025

# Metal prices are quoted per gram in this currency
METAL_PRICE_CURRENCY = 'USD'

# Closed category sets for the input snapshot
ASSET_CATEGORIES = (
    'cash',
    'gold',
    'silver',
    'investments',
    'business',
    'crypto',
)

LIABILITY_CATEGORIES = (
    'short_term_debt',
    'long_term_debt_due',
    'personal_loans',
    'other',
)

ASSET_CATEGORY_LABELS = {
    'cash': 'Cash & Bank Accounts',
    'gold': 'Gold',
    'silver': 'Silver',
    'investments': 'Investments',
    'business': 'Business Assets',
    'crypto': 'Cryptocurrency',
}

LIABILITY_CATEGORY_LABELS = {
    'short_term_debt': 'Short-term debt',
    'long_term_debt_due': 'Long-term debt due this year',
    'personal_loans': 'Personal loans',
    'other': 'Other liabilities',
}

# Persistence keys
SNAPSHOT_STORE_KEY = 'zakat-snapshot'
RATES_STORE_KEY = 'exchange-rates'
