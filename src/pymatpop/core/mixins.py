"""Formatting helpers shared by the result summaries."""

from __future__ import annotations

from typing import Any, Sequence

import numpy as np

from pymatpop.core.types import Transition

REPORT_WIDTH = 72


def _format_value(value: Any) -> str:
    """Render one metric value: booleans as Yes/No, floats to 4 decimals."""
    if value is None:
        return "N/A"
    if isinstance(value, (bool, np.bool_)):
        return "Yes" if value else "No"
    if not isinstance(value, (float, np.floating)):
        return str(value)

    value = float(value)
    if np.isnan(value):
        return "N/A"
    if np.isinf(value):
        return "inf" if value > 0 else "-inf"
    # Fecundities of 1e6 and survival of 1e-9 both occur in real models
    if value != 0 and (abs(value) < 1e-4 or abs(value) >= 1e6):
        return f"{value:.4e}"
    return f"{value:.4f}"


class ResultSummaryMixin:
    """
    Layout helpers for the plain-text summary() reports.

    Results call these as static methods so every report shares one layout:
    a banner, dotted metric lines grouped under section titles and a timing
    footer.
    """

    @staticmethod
    def _format_header(title: str) -> str:
        border = "=" * REPORT_WIDTH
        return f"{border}\n{title.center(REPORT_WIDTH).rstrip()}\n{border}"

    @staticmethod
    def _format_section(title: str) -> str:
        return f"\n{title}:\n{'-' * len(title)}"

    @staticmethod
    def _format_metric(label: str, value: Any, width: int = 44) -> str:
        """
        One dotted `label ..... value` line.

        Args:
            label: Metric name
            value: Metric value (bool, number, string or None)
            width: Column at which the value ends

        Returns:
            Indented metric line
        """
        text = _format_value(value)
        dots = "." * max(1, width - len(label) - len(text) - 2)
        return f"  {label} {dots} {text}"

    @staticmethod
    def _stage_name(index: int, labels: Sequence[str] | None) -> str:
        return labels[index] if labels is not None else f"stage {index}"

    @staticmethod
    def _transition_name(transition: Transition, labels: Sequence[str] | None) -> str:
        """Name entry a[i, j] as `from -> to` when stages are labelled."""
        i, j = transition
        if labels is None:
            return f"a[{i},{j}]"
        return f"{labels[j]} -> {labels[i]}"

    @staticmethod
    def _format_vector(
        values: Sequence[float],
        labels: Sequence[str] | None = None,
        max_items: int = 12,
    ) -> list[str]:
        """One metric line per stage, truncated after `max_items` stages."""
        shown = len(values) if len(values) <= max_items else max_items
        lines = [
            ResultSummaryMixin._format_metric(
                ResultSummaryMixin._stage_name(i, labels), float(values[i])
            )
            for i in range(shown)
        ]
        if shown < len(values):
            lines.append(f"  ... and {len(values) - shown} more stage(s)")
        return lines

    @staticmethod
    def _format_names(names: Sequence[str], max_items: int = 5, noun: str = "stage") -> str:
        """Numbered list of names, or `(none)`."""
        if not names:
            return "  (none)"
        lines = [f"  {k}. {name}" for k, name in enumerate(names[:max_items], start=1)]
        if len(names) > max_items:
            lines.append(f"  ... and {len(names) - max_items} more {noun}(s)")
        return "\n".join(lines)

    @staticmethod
    def _format_growth(growth_rate: float, tolerance: float = 1e-6) -> str:
        """Describe the asymptotic trend implied by lambda."""
        if abs(growth_rate - 1.0) <= tolerance:
            return "Stationary population (lambda = 1)"
        change = abs(growth_rate - 1.0) * 100
        trend = "Increasing" if growth_rate > 1.0 else "Declining"
        return f"{trend} population ({change:.1f}% per time step)"

    @staticmethod
    def _format_footer(computation_time_ms: float) -> str:
        if computation_time_ms >= 1000:
            elapsed = f"{computation_time_ms / 1000:.2f} s"
        else:
            elapsed = f"{computation_time_ms:.2f} ms"
        return f"\nComputation Time: {elapsed}\n{'=' * REPORT_WIDTH}"
