"""Default configuration parameters for the index fund allocator."""

from dataclasses import dataclass


DEFAULT_SOURCE_URL = (
    "https://raw.githubusercontent.com/datasets/s-and-p-companies-financials/"
    "master/data/constituents-financials.csv"
)


@dataclass(frozen=True)
class SourceParams:
    """Constituents table source parameters."""
    url: str = DEFAULT_SOURCE_URL
    file_path: str = ""                      # Read from a local file instead of url when set
    timeout_seconds: int = 30
    retry_attempts: int = 0                  # Extra attempts after the first request
    retry_delay_seconds: float = 1.0
    encoding: str = "utf-8"


@dataclass(frozen=True)
class ColumnLabels:
    """Header labels for each logical column role."""
    symbol: str = "Symbol"
    name: str = "Name"
    sector: str = "Sector"
    price: str = "Price"
    market_cap: str = "Market Cap"


@dataclass(frozen=True)
class DecoderParams:
    """Table decoding parameters."""
    labels: ColumnLabels = ColumnLabels()
    malformed_row_policy: str = "abort"      # abort | skip


@dataclass(frozen=True)
class AllocationParams:
    """Allocation parameters."""
    target_budget: float = 2000000.0


@dataclass(frozen=True)
class ReportParams:
    """Report output parameters."""
    format: str = "plain"                    # plain | json
    show_weights: bool = False
    show_budget: bool = False


@dataclass(frozen=True)
class LoggingParams:
    """Logging parameters."""
    level: str = "WARNING"
    format_json: bool = False


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    source: SourceParams
    decoder: DecoderParams
    allocation: AllocationParams
    report: ReportParams
    logging: LoggingParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        source=SourceParams(),
        decoder=DecoderParams(),
        allocation=AllocationParams(),
        report=ReportParams(),
        logging=LoggingParams(),
    )
