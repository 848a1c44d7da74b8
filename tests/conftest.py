"""Pytest configuration and shared fixtures."""

import pytest
from pathlib import Path

from ewfund_app.data.models import Equity
from ewfund_app.logging.config import configure_logging


SCENARIO_A_CSV = (
    "Symbol,Name,Sector,Price,Market Cap\n"
    "AAA,Alpha Co,Tech,10.0,1000000\n"
    "BBB,Beta Co,Energy,5.0,500000\n"
)


@pytest.fixture
def scenario_a_csv() -> str:
    """Two-row constituents table in the published column order."""
    return SCENARIO_A_CSV


@pytest.fixture
def scenario_a_file(tmp_path: Path) -> Path:
    """Scenario A table written to disk."""
    path = tmp_path / "constituents.csv"
    path.write_text(SCENARIO_A_CSV, encoding="utf-8")
    return path


@pytest.fixture
def alpha() -> Equity:
    return Equity(symbol="AAA", name="Alpha Co", sector="Tech", price=10.0, market_cap=1000000.0)


@pytest.fixture
def beta() -> Equity:
    return Equity(symbol="BBB", name="Beta Co", sector="Energy", price=5.0, market_cap=500000.0)


@pytest.fixture
def sample_equities() -> list[Equity]:
    """A handful of constituents with distinct caps and prices."""
    return [
        Equity(symbol="MMM", name="3M Company", sector="Industrials", price=222.89, market_cap=138721055226.0),
        Equity(symbol="AOS", name="A.O. Smith Corp", sector="Industrials", price=60.24, market_cap=10783419933.0),
        Equity(symbol="ABT", name="Abbott Laboratories", sector="Health Care", price=56.27, market_cap=102121042306.0),
        Equity(symbol="ABBV", name="AbbVie Inc.", sector="Health Care", price=108.48, market_cap=181386347059.0),
        Equity(symbol="ACN", name="Accenture plc", sector="Information Technology", price=150.51, market_cap=98765855553.0),
    ]


@pytest.fixture(autouse=True, scope="session")
def quiet_logging():
    """Route structlog output to stderr at WARNING for the whole session."""
    configure_logging(level="WARNING")
