"""Standard output allocation report."""

import json
import sys
from typing import Optional, TextIO

import structlog

from ..config.defaults import ReportParams
from ..weighting.calculator import IndexSnapshot


class StdoutReporter:
    """Prints an index snapshot as plain text lines or a JSON document."""

    def __init__(self, config: Optional[ReportParams] = None, stream: Optional[TextIO] = None):
        self.config = config or ReportParams()
        self.stream = stream
        self.logger = structlog.get_logger("report.stdout")

    def report(self, snapshot: IndexSnapshot) -> int:
        """Write the report and return the number of lines written."""
        stream = self.stream or sys.stdout
        lines = self.render(snapshot)

        for line in lines:
            print(line, file=stream)
        stream.flush()

        self.logger.info(
            "Allocation reported",
            format=self.config.format,
            equities=len(snapshot.allocation),
            lines=len(lines)
        )
        return len(lines)

    def render(self, snapshot: IndexSnapshot) -> list[str]:
        """Format a snapshot without writing it."""
        if self.config.format == "json":
            return [json.dumps(self._to_document(snapshot))]
        return self._plain_lines(snapshot)

    def _plain_lines(self, snapshot: IndexSnapshot) -> list[str]:
        lines = []

        if self.config.show_weights:
            lines.extend(f"{equity.symbol} {weight:f}" for equity, weight in snapshot.weights.items())
            lines.append("")

        if self.config.show_budget:
            lines.append(f"${snapshot.min_budget:f}")
            lines.append("")

        lines.extend(f"{equity.symbol} {shares}" for equity, shares in snapshot.allocation.items())
        return lines

    def _to_document(self, snapshot: IndexSnapshot) -> dict:
        allocation = snapshot.allocation
        document = {
            "target_budget": allocation.target_budget,
            "min_budget": snapshot.min_budget,
            "multiple": allocation.multiple,
            "realized_cost": allocation.realized_cost(),
            "drift": allocation.drift(),
            "allocations": allocation.by_symbol(),
        }
        if self.config.show_weights:
            document["weights"] = snapshot.weights.by_symbol()
        return document
