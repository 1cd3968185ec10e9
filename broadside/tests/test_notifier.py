"""
Tests for outbound event notification.

Tests:
- CloudEvent headers and body
- Delivery through the HTTP session
- Failures are logged, never raised
"""

import json
import logging

import pytest
import requests

from ..board import ShipType
from ..events import EventNotifier, EventType


class FakeResponse:
    def __init__(self, status_code=202):
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


class FakeSession:
    """Records posts instead of sending them."""

    def __init__(self, status_code=202, error=None):
        self.status_code = status_code
        self.error = error
        self.posts = []
        self.closed = False

    def post(self, url, headers=None, data=None, timeout=None):
        self.posts.append({"url": url, "headers": headers, "data": data})
        if self.error:
            raise self.error
        return FakeResponse(self.status_code)

    def close(self):
        self.closed = True


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def notifier(session):
    return EventNotifier(
        broker_url="http://broker.local/",
        source="broadside-test",
        game_id="game-1",
        session=session,
    )


class TestEventPayloads:
    """Tests for event construction."""

    def test_binary_mode_headers(self, notifier):
        """CloudEvent attributes travel as ce-* headers."""
        data = notifier._shot_data("m1", "alice", "bob", (2, 3), ShipType.DESTROYER)
        headers, body = notifier.build_request(EventType.HIT, data)

        assert headers["ce-specversion"] == "1.0"
        assert headers["ce-type"] == "hit"
        assert headers["ce-source"] == "broadside-test"
        assert headers["ce-id"]
        assert headers["content-type"] == "application/json"

        payload = json.loads(body)
        assert payload["by"] == "alice"
        assert payload["against"] == "bob"
        assert payload["game"] == "game-1"
        assert payload["match"] == "m1"
        assert payload["origin"] == "2,3"
        assert payload["type"] == "Destroyer"
        assert isinstance(payload["ts"], int)

    def test_miss_has_no_ship_type(self, notifier):
        data = notifier._shot_data("m1", "alice", "bob", (0, 0))
        _, body = notifier.build_request(EventType.MISS, data)

        assert "type" not in json.loads(body)


class TestDelivery:
    """Tests for sending events."""

    def test_posts_to_broker(self, notifier, session):
        """Events are posted once the notifier is started."""
        with notifier:
            notifier.sink("m1", "alice", "bob", (1, 1), ShipType.SUBMARINE)

        assert len(session.posts) == 1
        post = session.posts[0]
        assert post["url"] == "http://broker.local/"
        assert post["headers"]["ce-type"] == "sink"

    def test_lose_uses_its_own_type(self, notifier, session):
        """Loss notifications are not sent as wins."""
        with notifier:
            notifier.win("m1", "alice")
            notifier.lose("m1", "bob")

        types = sorted(p["headers"]["ce-type"] for p in session.posts)
        assert types == ["lose", "win"]

    def test_failure_is_logged(self, session, caplog):
        """Broker errors never reach the caller."""
        session.error = requests.ConnectionError("broker down")
        notifier = EventNotifier(broker_url="http://broker.local/", session=session)

        with caplog.at_level(logging.ERROR):
            with notifier:
                notifier.miss("m1", "alice", "bob", (0, 0))

        assert "error sending cloud event" in caplog.text

    def test_http_error_is_logged(self, caplog):
        """Non-2xx responses are logged as failures."""
        session = FakeSession(status_code=503)
        notifier = EventNotifier(broker_url="http://broker.local/", session=session)

        with caplog.at_level(logging.ERROR):
            with notifier:
                notifier.win("m1", "alice")

        assert len(session.posts) == 1
        assert "error sending cloud event" in caplog.text

    def test_disabled_without_broker(self, session):
        """No broker URL means nothing is posted."""
        notifier = EventNotifier(broker_url=None, session=session)

        with notifier:
            notifier.win("m1", "alice")

        assert notifier.enabled is False
        assert session.posts == []

    def test_not_started_drops_event(self, notifier, session, caplog):
        """Sending before start() is a no-op with a warning."""
        with caplog.at_level(logging.WARNING):
            notifier.win("m1", "alice")

        assert session.posts == []
        assert "not started" in caplog.text

    def test_injected_session_left_open(self, notifier, session):
        """The notifier only closes sessions it created."""
        notifier.start()
        notifier.close()

        assert session.closed is False
        assert notifier.running is False
