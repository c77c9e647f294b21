"""Tests for nisab standard selection."""
import pytest

from zakat.constants import GOLD_WEIGHT_GRAMS, SILVER_WEIGHT_GRAMS
from zakat.services.calc import build_input, compute_zakat
from zakat.services.models import NisabStandard


class TestNisabStandardParse:
    """Tests for NisabStandard.parse."""

    @pytest.mark.parametrize('raw,expected', [
        ('gold', NisabStandard.GOLD),
        ('GOLD', NisabStandard.GOLD),
        (' Silver ', NisabStandard.SILVER),
        (NisabStandard.SILVER, NisabStandard.SILVER),
    ])
    def test_known_values(self, raw, expected):
        assert NisabStandard.parse(raw) is expected

    @pytest.mark.parametrize('raw', ['platinum', '', None, 42])
    def test_unknown_values_default_to_gold(self, raw):
        assert NisabStandard.parse(raw) is NisabStandard.GOLD

    def test_unknown_value_uses_given_default(self):
        assert NisabStandard.parse('bronze', NisabStandard.SILVER) is NisabStandard.SILVER

    def test_value_is_plain_string(self):
        """Standards serialize as their lowercase name."""
        assert NisabStandard.GOLD.value == 'gold'
        assert NisabStandard.SILVER == 'silver'


class TestNisabWeights:
    """The weights are fixed physical constants."""

    def test_gold_weight(self):
        assert GOLD_WEIGHT_GRAMS == 87.48

    def test_silver_weight(self):
        assert SILVER_WEIGHT_GRAMS == 612.36


class TestConfiguredDefaultStandard:
    """Default standard comes from NISAB_DEFAULT_STANDARD."""

    def test_default_is_gold(self):
        calc_input = build_input({})
        assert calc_input.standard is NisabStandard.GOLD

    def test_env_selects_silver(self, monkeypatch):
        monkeypatch.setenv('NISAB_DEFAULT_STANDARD', 'silver')
        calc_input = build_input({'assets': {'cash': 1000}})
        result = compute_zakat(calc_input)

        assert result.standard is NisabStandard.SILVER
        assert result.nisab_threshold == pytest.approx(0.85 * SILVER_WEIGHT_GRAMS)
        assert result.is_obligated is True

    def test_invalid_env_falls_back_to_gold(self, monkeypatch):
        monkeypatch.setenv('NISAB_DEFAULT_STANDARD', 'copper')
        assert build_input({}).standard is NisabStandard.GOLD

    def test_request_overrides_env(self, monkeypatch):
        monkeypatch.setenv('NISAB_DEFAULT_STANDARD', 'silver')
        assert build_input({'standard': 'gold'}).standard is NisabStandard.GOLD
