import io
import math
from datetime import datetime, timedelta, timezone

from investment_tracker.models import Config, Investment, Performance
from investment_tracker.report import ReportFormatter


def test_render_matches_expected_layout(sample_config):
    report = ReportFormatter().render(sample_config)

    assert report == (
        "===VTI 1000.00 03-Jan-23 ===\n"
        "14-Mar-24 6.13 %\n"
        "13-Mar-24 4.50 %\n"
        "\n"
        "===AAPL 1500.50 01-Jun-22 ===\n"
    )


def test_render_preserves_investment_order():
    when = datetime(2020, 1, 1, tzinfo=timezone.utc)
    symbols = ["ZZZ", "AAA", "MMM"]
    config = Config(investments=[Investment(s, when, 1.0, 1.0) for s in symbols])

    headers = [line for line in ReportFormatter().render(config).splitlines() if line.startswith("===")]

    assert [header.split()[0] for header in headers] == ["===ZZZ", "===AAA", "===MMM"]


def test_orphaned_history_is_ignored(fixed_now):
    config = Config(history={"GONE": [Performance("GONE", 1.0, 5.0, fixed_now)]})

    assert ReportFormatter().render(config) == ""


def test_duplicate_days_are_collapsed_in_report(fixed_now):
    when = datetime(2020, 1, 1, tzinfo=timezone.utc)
    config = Config(
        investments=[Investment("X", when, 10.0, 1.0)],
        history={
            "X": [
                Performance("X", 1.0, 1.0, fixed_now),
                Performance("X", 1.0, 2.0, fixed_now + timedelta(minutes=1)),
            ]
        },
    )

    assert ReportFormatter().render(config).splitlines()[1:] == ["15-Mar-24 2.00 %", ""]


def test_non_finite_rates_are_rendered_as_is(fixed_now):
    when = datetime(2020, 1, 1, tzinfo=timezone.utc)
    config = Config(
        investments=[Investment("X", when, 10.0, 1.0)],
        history={"X": [Performance("X", 1.0, math.nan, fixed_now)]},
    )

    assert "15-Mar-24 nan %" in ReportFormatter().render(config)


def test_write_streams_to_file_object(sample_config):
    stream = io.StringIO()

    ReportFormatter().write(stream, sample_config)

    assert stream.getvalue() == ReportFormatter().render(sample_config)
