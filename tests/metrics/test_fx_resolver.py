"""Tests for FX rate resolution"""

import pytest

from inversion_app.data.models import FxRateKind
from inversion_app.metrics.fx_resolver import SNAPSHOT_FIELDS, resolve_rate


class TestResolveRate:
    """Test the rate resolver"""

    def test_manual_returns_override_verbatim(self, sample_snapshot):
        assert resolve_rate(FxRateKind.MANUAL, sample_snapshot, 1234.5) == 1234.5

    def test_manual_ignores_snapshot(self):
        assert resolve_rate(FxRateKind.MANUAL, None, 1234.5) == 1234.5

    @pytest.mark.parametrize("override", [None, 0.0, -10.0])
    def test_manual_without_usable_override(self, sample_snapshot, override):
        assert resolve_rate(FxRateKind.MANUAL, sample_snapshot, override) is None

    @pytest.mark.parametrize("kind,expected", [
        (FxRateKind.BLUE, 1200.0),
        (FxRateKind.OFFICIAL, 1000.0),
        (FxRateKind.STOCK_EXCHANGE, 1150.0),
        (FxRateKind.CASH_SETTLEMENT, 1180.0),
        (FxRateKind.CARD, 1400.0),
        (FxRateKind.WHOLESALE, 980.0),
    ])
    def test_named_kind_reads_matching_field(self, sample_snapshot, kind, expected):
        assert resolve_rate(kind, sample_snapshot) == expected

    def test_named_kind_ignores_manual_override(self, sample_snapshot):
        assert resolve_rate(FxRateKind.BLUE, sample_snapshot, 5.0) == 1200.0

    def test_unavailable_snapshot_resolves_nothing(self):
        for kind in FxRateKind:
            if kind is FxRateKind.MANUAL:
                continue
            assert resolve_rate(kind, None) is None

    def test_mapping_is_total(self):
        """Every non-manual kind has exactly one snapshot field"""
        named = {kind for kind in FxRateKind if kind is not FxRateKind.MANUAL}
        assert set(SNAPSHOT_FIELDS) == named
        assert len(set(SNAPSHOT_FIELDS.values())) == len(named)
