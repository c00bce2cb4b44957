"""
Tests for wg_report.status module.
"""

from datetime import timedelta

import pytest

from wg_report.models import Status
from wg_report.status import classify_status


ONLINE = timedelta(minutes=3)
EXPIRY = timedelta(days=28)


def classify(known, last_handshake, now):
    return classify_status(
        known, last_handshake, now=now, online_window=ONLINE, expiry_window=EXPIRY
    )


class TestClassifyStatus:
    """Tests for classify_status."""

    @pytest.mark.parametrize(
        "age", [None, timedelta(seconds=1), timedelta(days=1), timedelta(days=400)]
    )
    def test_unknown_peer_is_unknown(self, now, age):
        """Peers absent from the runtime are unknown whatever the handshake."""
        last = None if age is None else now - age
        assert classify(False, last, now) is Status.UNKNOWN

    @pytest.mark.parametrize(
        "age", [timedelta(0), timedelta(seconds=30), timedelta(minutes=2, seconds=59)]
    )
    def test_recent_handshake_is_online(self, now, age):
        assert classify(True, now - age, now) is Status.ONLINE

    def test_handshake_in_the_future_is_online(self, now):
        """Clock skew: negative age is still within the window."""
        assert classify(True, now + timedelta(seconds=10), now) is Status.ONLINE

    def test_naive_now_is_read_as_utc(self, now):
        naive_now = now.replace(tzinfo=None)
        assert classify(True, now - timedelta(minutes=1), naive_now) is Status.ONLINE
        assert classify(True, now - timedelta(days=40), naive_now) is Status.DORMANT

    def test_naive_handshake_is_read_as_utc(self, now):
        last = (now - timedelta(minutes=1)).replace(tzinfo=None)
        assert classify(True, last, now) is Status.ONLINE

    def test_known_without_handshake_is_offline(self, now):
        assert classify(True, None, now) is Status.OFFLINE

    def test_exactly_online_window_is_offline(self, now):
        assert classify(True, now - ONLINE, now) is Status.OFFLINE

    def test_between_windows_is_offline(self, now):
        assert classify(True, now - timedelta(days=3), now) is Status.OFFLINE

    def test_exactly_expiry_window_is_offline(self, now):
        assert classify(True, now - EXPIRY, now) is Status.OFFLINE

    def test_older_than_expiry_is_dormant(self, now):
        assert classify(True, now - timedelta(days=40), now) is Status.DORMANT

    def test_online_checked_before_dormant(self, now):
        """Online wins when the online window exceeds the expiry window."""
        status = classify_status(
            True,
            now - timedelta(hours=2),
            now=now,
            online_window=timedelta(days=1),
            expiry_window=timedelta(hours=1),
        )
        assert status is Status.ONLINE


class TestStatusRendering:
    """Tests for Status string form."""

    def test_str_is_lowercase_name(self):
        assert [str(s) for s in Status] == ["unknown", "offline", "online", "dormant"]

    def test_parse_from_value(self):
        assert Status("dormant") is Status.DORMANT
