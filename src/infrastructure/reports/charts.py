"""Chart payloads derived from tabular query results."""
from __future__ import annotations

from numbers import Number
from typing import Any, Mapping, Sequence

from src.core.entities import ChartData

MAX_CHART_POINTS = 20


def _is_numeric(value: Any) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


def build_query_chart(rows: Sequence[Mapping[str, Any]]) -> list[ChartData]:
    """Build at most one single-series chart from ``rows``.

    The first non-numeric column of the first row labels the points and the
    first numeric column supplies the values. Rows without a numeric value are
    skipped and at most ``MAX_CHART_POINTS`` points are kept.
    """

    if not rows or not rows[0]:
        return []

    first = rows[0]
    label_key = next((key for key, value in first.items() if not _is_numeric(value)), None)
    value_key = next((key for key, value in first.items() if _is_numeric(value)), None)
    if value_key is None:
        return []
    if label_key is None:
        label_key = next(iter(first))

    labels: list[str] = []
    values: list[float] = []
    for row in rows:
        if not row or not _is_numeric(row.get(value_key)):
            continue
        label = row.get(label_key)
        labels.append(str(label) if label is not None else "unknown")
        values.append(float(row[value_key]))
        if len(labels) >= MAX_CHART_POINTS:
            break

    if not labels:
        return []

    lowered = label_key.lower()
    chart_type = "line" if "date" in lowered or "time" in lowered else "bar"
    return [
        ChartData(
            title=f"Query result ({value_key} by {label_key})",
            chart_type=chart_type,
            labels=tuple(labels),
            values=tuple(values),
            series_name=value_key,
        )
    ]


__all__ = ["MAX_CHART_POINTS", "build_query_chart"]
