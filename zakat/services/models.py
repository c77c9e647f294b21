"""Immutable value objects for zakat calculation input and output."""
import math
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Mapping, Optional

from zakat.constants import ASSET_CATEGORIES, LIABILITY_CATEGORIES, ZAKAT_RATE


def to_amount(value) -> float:
    """Coerce a raw value to a non-negative finite float.

    Anything that cannot be read as a number, and any negative, NaN or
    infinite number, becomes 0.0.
    """
    if isinstance(value, bool):
        return 0.0
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(amount) or amount < 0:
        return 0.0
    return amount


def to_rate(value) -> float:
    """Coerce a raw exchange rate to a positive finite float, defaulting to 1.0."""
    if isinstance(value, bool):
        return 1.0
    try:
        rate = float(value)
    except (TypeError, ValueError):
        return 1.0
    if not math.isfinite(rate) or rate <= 0:
        return 1.0
    return rate


class NisabStandard(str, Enum):
    """Which metal the Nisab threshold is measured in."""
    GOLD = 'gold'
    SILVER = 'silver'

    @classmethod
    def parse(cls, value, default: 'NisabStandard' = None) -> 'NisabStandard':
        """Parse a standard from text; unknown values give ``default`` (GOLD if unset)."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        return default if default is not None else cls.GOLD


@dataclass(frozen=True)
class AssetSnapshot:
    """Declared zakatable assets, in display currency."""
    cash: float = 0.0
    gold: float = 0.0
    silver: float = 0.0
    investments: float = 0.0
    business: float = 0.0
    crypto: float = 0.0

    @classmethod
    def from_dict(cls, data: Optional[Mapping]) -> 'AssetSnapshot':
        data = data if isinstance(data, Mapping) else {}
        return cls(**{key: to_amount(data.get(key, 0)) for key in ASSET_CATEGORIES})

    def as_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class LiabilitySnapshot:
    """Debts deductible from assets, in display currency."""
    short_term_debt: float = 0.0
    long_term_debt_due: float = 0.0
    personal_loans: float = 0.0
    other: float = 0.0

    @classmethod
    def from_dict(cls, data: Optional[Mapping]) -> 'LiabilitySnapshot':
        data = data if isinstance(data, Mapping) else {}
        return cls(**{key: to_amount(data.get(key, 0)) for key in LIABILITY_CATEGORIES})

    def as_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class MetalPrices:
    """Gold and silver prices per gram in the metal price currency (USD)."""
    gold: float = 0.0
    silver: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, 'gold', to_amount(self.gold))
        object.__setattr__(self, 'silver', to_amount(self.silver))


@dataclass(frozen=True)
class CalculationInput:
    """Everything one calculation depends on."""
    assets: AssetSnapshot = field(default_factory=AssetSnapshot)
    liabilities: LiabilitySnapshot = field(default_factory=LiabilitySnapshot)
    metal_prices: MetalPrices = field(default_factory=MetalPrices)
    standard: NisabStandard = NisabStandard.GOLD
    display_currency: str = 'USD'
    exchange_rates: Mapping[str, float] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            'assets': self.assets.as_dict(),
            'liabilities': self.liabilities.as_dict(),
            'gold_price': self.metal_prices.gold,
            'silver_price': self.metal_prices.silver,
            'standard': self.standard.value,
            'display_currency': self.display_currency,
        }


@dataclass(frozen=True)
class Obligation:
    """Outcome of comparing net assets against the threshold."""
    is_obligated: bool
    zakat_due: float
    nisab_percentage: float


@dataclass(frozen=True)
class CalculationResult:
    """Derived figures for one input snapshot. Never persisted."""
    total_assets: float
    total_liabilities: float
    net_assets: float
    nisab_threshold: float
    nisab_percentage: float
    is_obligated: bool
    zakat_due: float
    standard: NisabStandard = NisabStandard.GOLD
    display_currency: str = 'USD'
    exchange_rate: float = 1.0
    zakat_rate: float = ZAKAT_RATE

    @property
    def shortfall(self) -> float:
        """How far net assets are below the threshold; 0 once it is met."""
        return max(0.0, self.nisab_threshold - self.net_assets)

    def to_dict(self) -> dict:
        """Serialize for JSON responses, rounding money to cents."""
        return {
            'display_currency': self.display_currency,
            'standard': self.standard.value,
            'total_assets': round(self.total_assets, 2),
            'total_liabilities': round(self.total_liabilities, 2),
            'net_assets': round(self.net_assets, 2),
            'nisab_threshold': round(self.nisab_threshold, 2),
            'nisab_percentage': round(self.nisab_percentage, 2),
            'shortfall': round(self.shortfall, 2),
            'is_obligated': self.is_obligated,
            'zakat_due': round(self.zakat_due, 2),
            'zakat_rate': self.zakat_rate,
            'exchange_rate': self.exchange_rate,
        }
