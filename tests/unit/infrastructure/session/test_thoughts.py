"""Tests for the per-session side channel."""
from __future__ import annotations

import threading

from src.core.entities import ChartData, SessionSnapshot
from src.infrastructure.session.thoughts import InMemoryThoughtSink


def make_chart() -> ChartData:
    return ChartData(
        title="Query result (count by street)",
        chart_type="bar",
        labels=("BROADWAY",),
        values=(4.0,),
        series_name="count",
    )


def test_consume_returns_everything_once():
    sink = InMemoryThoughtSink()
    sink.append_thought("s1", "Identified scenario: general")
    sink.attach_charts("s1", [make_chart()])
    sink.add_queried_tables("s1", ["nyc_traffic_accidents"])
    sink.set_summary("s1", "4 accidents")

    snapshot = sink.consume_and_clear("s1")

    assert snapshot.thoughts == ("Identified scenario: general",)
    assert snapshot.charts == (make_chart(),)
    assert snapshot.queried_tables == ("nyc_traffic_accidents",)
    assert snapshot.summary == "4 accidents"
    assert snapshot.involves_data_query is True
    assert sink.consume_and_clear("s1") == SessionSnapshot()
    assert len(sink) == 0


def test_sessions_are_isolated():
    sink = InMemoryThoughtSink()
    sink.append_thought("a", "first")
    sink.append_thought("b", "second")

    assert sink.consume_and_clear("a").thoughts == ("first",)
    assert len(sink) == 1
    assert sink.consume_and_clear("b").thoughts == ("second",)


def test_empty_charts_do_not_flag_data_query():
    sink = InMemoryThoughtSink()
    sink.attach_charts("s1", [])
    assert sink.consume_and_clear("s1").involves_data_query is False


def test_concurrent_appends_are_all_kept():
    sink = InMemoryThoughtSink()

    def worker(offset: int) -> None:
        for index in range(100):
            sink.append_thought("shared", f"{offset}-{index}")

    threads = [threading.Thread(target=worker, args=(offset,)) for offset in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(sink.consume_and_clear("shared").thoughts) == 400
