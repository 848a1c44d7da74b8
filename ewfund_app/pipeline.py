"""
Main allocation pipeline coordinator.

Runs the index fund allocation once, strictly in order:
Source → Decoder → Weights → Minimum Budget → Allocator → Reporter.
Each stage consumes the immutable result of the previous one.
"""

from typing import Optional

from .config.defaults import DefaultConfig, get_default_config
from .data.models import DecodeResult
from .data.parsers import decode_csv_text
from .logging.config import get_pipeline_logger, log_stage_completed
from .report.stdout_report import StdoutReporter
from .source import BaseRecordSource, create_source
from .weighting.calculator import IndexCalculator, IndexSnapshot


class IndexFundPipeline:
    """
    Coordinator for a single allocation run.

    Manages the pipeline:
    Fetch → Decode → Weight → Budget → Allocate → Report
    """

    def __init__(
        self,
        config: Optional[DefaultConfig] = None,
        source: Optional[BaseRecordSource] = None,
        reporter: Optional[StdoutReporter] = None
    ) -> None:
        """Initialize the pipeline; source and reporter default from config."""
        self.config = config or get_default_config()
        self.logger = get_pipeline_logger(__name__)

        self.source = source or create_source(self.config.source)
        self.calculator = IndexCalculator(self.config)
        self.reporter = reporter or StdoutReporter(self.config.report)

    def fetch(self) -> str:
        """Read the raw constituents CSV."""
        text = self.source.fetch_with_retry(
            max_retries=self.config.source.retry_attempts,
            retry_delay=self.config.source.retry_delay_seconds
        )
        log_stage_completed(self.logger, "fetch", {"source": self.source.location})
        return text

    def decode(self, text: str) -> DecodeResult:
        """Decode CSV text into equities."""
        decoded = decode_csv_text(
            text,
            labels=self.config.decoder.labels,
            malformed_row_policy=self.config.decoder.malformed_row_policy
        )
        log_stage_completed(self.logger, "decode", {
            "equities": len(decoded),
            "skipped_rows": list(decoded.skipped_rows),
            "max_market_cap": decoded.max_market_cap,
        })
        return decoded

    def calculate(self, decoded: DecodeResult) -> IndexSnapshot:
        """Compute weights, minimum budget and allocation."""
        snapshot = self.calculator.calculate(decoded, self.config.allocation.target_budget)
        log_stage_completed(self.logger, "allocate", {
            "target_budget": snapshot.allocation.target_budget,
            "min_budget": snapshot.min_budget,
            "multiple": snapshot.allocation.multiple,
        })
        return snapshot

    def run(self) -> IndexSnapshot:
        """
        Execute every stage once and report the allocation.

        Nothing is written to the report stream unless all stages succeed.

        Raises:
            DataQualityError: Input table problems and domain violations
            SystemFailureError: Source, calculation and configuration failures
        """
        text = self.fetch()
        decoded = self.decode(text)
        snapshot = self.calculate(decoded)

        self.reporter.report(snapshot)
        log_stage_completed(self.logger, "report", {"equities": len(snapshot.allocation)})
        return snapshot
