"""Integration tests for the full contribution pipeline."""

import pytest
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import MagicMock, patch
from urllib.error import URLError

import orjson

from inversion_app.engine import PortfolioEngine
from inversion_app.fx.provider import DolarApiFetcher, FxRateProvider
from inversion_app.persistence.transaction_store import SqliteTransactionStore

from conftest import FakeClock


def feed_response(body: bytes) -> MagicMock:
    response = MagicMock()
    response.getcode.return_value = 200
    response.read.return_value = body
    response.__enter__.return_value = response
    return response


@pytest.mark.integration
class TestFullPipeline:
    """Feed → engine → SQLite → summary."""

    def test_contributions_against_benchmark(self, tmp_path: Path,
                                             sample_dolarapi_response) -> None:
        clock = FakeClock(datetime(2024, 1, 1, tzinfo=timezone.utc))
        provider = FxRateProvider(
            fetcher=DolarApiFetcher("https://dolarapi.com/v1/dolares"),
            clock=clock,
        )
        store = SqliteTransactionStore(str(tmp_path / "data.db"))
        engine = PortfolioEngine(store, provider, clock=clock)
        body = orjson.dumps(sample_dolarapi_response)

        with patch("inversion_app.fx.provider.urlopen",
                   return_value=feed_response(body)) as mock_open:
            engine.create_transaction({
                "date": "2023-01-01", "type": "APORTE", "currency": "USD", "amount": 1000,
            })
            ars = engine.create_transaction({
                "date": "2023-01-01", "type": "APORTE", "currency": "ARS",
                "amount": 129000, "fxType": "BLUE",
            })
            engine.create_transaction({
                "date": "2023-07-01", "type": "COBRO", "currency": "USD", "amount": 50,
            })

        # USD entries never look up a rate
        assert mock_open.call_count == 1
        assert ars.fx_rate == 1290.0
        assert ars.usd_equivalent == pytest.approx(100.0)

        summary = engine.summary().to_dict()

        assert summary["contributions"]["totalUSD"] == 1000.0
        assert summary["contributions"]["totalARS"] == 129000.0
        assert summary["contributions"]["totalUsdEquivalent"] == pytest.approx(1100.0)
        assert summary["withdrawals"]["countUSD"] == 1
        assert summary["benchmark"]["investedUSD"] == pytest.approx(1100.0)
        assert summary["benchmark"]["hypotheticalUSD"] == pytest.approx(1210.0)
        assert summary["benchmark"]["differencePercent"] == pytest.approx(10.0)

    def test_rates_outage_uses_fallback_then_recovers(self, tmp_path: Path,
                                                      sample_dolarapi_response) -> None:
        clock = FakeClock(datetime(2024, 6, 1, tzinfo=timezone.utc))
        provider = FxRateProvider(
            fetcher=DolarApiFetcher("https://dolarapi.com/v1/dolares"),
            clock=clock,
            ttl_seconds=300,
        )
        engine = PortfolioEngine(SqliteTransactionStore(str(tmp_path / "data.db")),
                                 provider, clock=clock)

        with patch("inversion_app.fx.provider.urlopen", side_effect=URLError("down")):
            assert engine.current_rate("BLUE") == 1200.0

        with patch("inversion_app.fx.provider.urlopen",
                   return_value=feed_response(orjson.dumps(sample_dolarapi_response))):
            assert engine.current_rate("BLUE") == 1290.0

        clock.advance(600)
        with patch("inversion_app.fx.provider.urlopen", side_effect=URLError("down")):
            # stale cache beats the fallback table
            assert engine.current_rate("BLUE") == 1290.0

    def test_restart_keeps_data(self, tmp_path: Path) -> None:
        overrides = {"storage": {"candidate_paths": [str(tmp_path / "data.db")]}}
        clock = FakeClock(datetime(2024, 6, 1, tzinfo=timezone.utc))

        first = PortfolioEngine.from_config(tmp_path, overrides=overrides, clock=clock)
        created = first.create_transaction({
            "date": "2024-01-15", "type": "APORTE", "currency": "ARS",
            "amount": 120000, "fxType": "MANUAL", "fxRate": 1200, "note": "Cuota 1",
        })
        first.select_benchmark("ftse_nareit")

        second = PortfolioEngine.from_config(tmp_path, overrides=overrides, clock=clock)

        assert second.get_transaction(created.id) == created
        assert second.get_settings().selected_benchmark == "ftse_nareit"
        assert second.summary().benchmark_rate == 7.5
