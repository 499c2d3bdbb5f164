"""Tests for the peak-hours analyzer."""

from timer_insights.analyzers import analyze_peak_hours
from timer_insights.models import Confidence


class TestPeakWindow:
    """Tests for choosing the busiest three-hour window."""

    def test_finds_morning_window(self, make_session) -> None:
        """Sessions at 9, 9, 10, 10, 10, 11 peak in 9 AM - 12 PM."""
        hours = [9, 9, 10, 10, 10, 11, 14]
        sessions = [make_session(days_ago=i, hour=h) for i, h in enumerate(hours)]

        window = analyze_peak_hours(sessions).peak_window
        assert window.start_hour == 9
        assert window.end_hour == 12
        assert window.sessions_count == 6

    def test_completion_rate_within_window(self, make_session) -> None:
        """Completion rate covers only the peak window."""
        sessions = [
            make_session(hour=9, completed=True),
            make_session(hour=9, completed=True),
            make_session(hour=10, completed=False),
            make_session(hour=10, completed=True),
        ]
        window = analyze_peak_hours(sessions).peak_window
        assert window.sessions_count == 4
        assert window.completion_rate == 75

    def test_total_duration_within_window(self, make_session) -> None:
        """Total duration covers only the peak window."""
        sessions = [
            make_session(hour=14, duration=600),
            make_session(hour=15, duration=900),
            make_session(hour=20, duration=100),
        ]
        window = analyze_peak_hours(sessions).peak_window
        assert window.sessions_count == 2
        assert window.total_duration == 1500

    def test_window_wraps_past_midnight(self, make_session) -> None:
        """A late-night cluster yields a window ending after midnight."""
        hours = [22, 22, 23, 23, 0, 0]
        sessions = [make_session(days_ago=i, hour=h) for i, h in enumerate(hours)]

        window = analyze_peak_hours(sessions).peak_window
        assert window.start_hour == 22
        assert window.end_hour == 1
        assert window.sessions_count == 6

    def test_ties_go_to_earliest_window(self, make_session) -> None:
        """Windows starting at 8 and 9 both hold three sessions; 8 wins."""
        sessions = [
            make_session(hour=9),
            make_session(hour=9),
            make_session(hour=10),
            make_session(hour=14),
        ]
        window = analyze_peak_hours(sessions).peak_window
        assert window.start_hour == 8
        assert window.sessions_count == 3

    def test_input_order_does_not_matter(self, make_session) -> None:
        """Reversing the input gives the same result."""
        sessions = [make_session(days_ago=i, hour=8 + i % 5) for i in range(12)]
        forward = analyze_peak_hours(sessions)
        backward = analyze_peak_hours(list(reversed(sessions)))
        assert forward == backward


class TestHourlyDistribution:
    """Tests for the 24-hour histogram."""

    def test_always_has_24_buckets(self, make_session) -> None:
        """The distribution covers every hour of the day."""
        insight = analyze_peak_hours([make_session(hour=13)])
        assert [b.hour for b in insight.hourly_distribution] == list(range(24))

    def test_counts_and_rates_per_hour(self, make_session) -> None:
        """Each hour carries its own counts and rate."""
        sessions = [
            make_session(hour=0, completed=True),
            make_session(hour=0, completed=False),
            make_session(hour=18, duration=1200),
        ]
        buckets = analyze_peak_hours(sessions).hourly_distribution
        assert buckets[0].sessions == 2
        assert buckets[0].completion_rate == 50
        assert buckets[18].duration == 1200
        assert buckets[5].sessions == 0
        assert buckets[5].completion_rate == 0

    def test_empty_input(self) -> None:
        """No sessions yield an empty window at midnight."""
        insight = analyze_peak_hours([])
        assert insight.peak_window.sessions_count == 0
        assert insight.peak_window.start_hour == 0
        assert insight.peak_window.completion_rate == 0
        assert len(insight.hourly_distribution) == 24
        assert insight.confidence == Confidence.LOW


class TestConfidence:
    """Tests for sample-size confidence."""

    def test_low_below_ten(self, make_session) -> None:
        """Fewer than 10 sessions is low confidence."""
        sessions = [make_session(days_ago=i) for i in range(8)]
        assert analyze_peak_hours(sessions).confidence == Confidence.LOW

    def test_medium_from_ten(self, make_session) -> None:
        """10 to 19 sessions is medium confidence."""
        sessions = [make_session(days_ago=i) for i in range(15)]
        assert analyze_peak_hours(sessions).confidence == Confidence.MEDIUM

    def test_high_from_twenty(self, make_session) -> None:
        """20 or more sessions is high confidence."""
        sessions = [make_session(days_ago=i) for i in range(25)]
        assert analyze_peak_hours(sessions).confidence == Confidence.HIGH
