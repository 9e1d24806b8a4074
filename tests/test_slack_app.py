from unittest.mock import MagicMock, patch

import pytest

from slack_app import build_app, reply_to_message
from store import SnapshotStore

BOT_ID = "U0BOT"


@pytest.fixture
def store() -> SnapshotStore:
    store = SnapshotStore()
    store.load({"N4861": {"title": "Working Draft", "link": "https://wg21.link/n4861"}})
    return store


def test_reply_sends_threaded_message_without_unfurls(store: SnapshotStore) -> None:
    say = MagicMock()
    event = {"text": f"<@{BOT_ID}> n4861", "channel_type": "channel", "thread_ts": "1700000000.000100"}

    reply_to_message(store, event, BOT_ID, say)

    say.assert_called_once_with(
        text="<https://wg21.link/n4861|N4861: Working Draft>",
        unfurl_links=False,
        unfurl_media=False,
        thread_ts="1700000000.000100",
    )


def test_reply_stays_quiet_for_unrelated_messages(store: SnapshotStore) -> None:
    say = MagicMock()

    reply_to_message(store, {"text": "lunch?", "channel_type": "channel"}, BOT_ID, say)

    say.assert_not_called()


def test_reply_ignores_bot_messages(store: SnapshotStore) -> None:
    say = MagicMock()

    reply_to_message(store, {"text": "[N4861]", "bot_id": "B123"}, BOT_ID, say)

    say.assert_not_called()


def test_reply_logs_and_swallows_platform_errors(store: SnapshotStore) -> None:
    say = MagicMock(side_effect=RuntimeError("slack is down"))

    with patch("slack_app.LOGGER") as mock_logger:
        reply_to_message(store, {"text": "[N4861]", "channel": "C1"}, BOT_ID, say)

    mock_logger.exception.assert_called_once()


def test_build_app_requires_credentials(store: SnapshotStore, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SLACK_BOT_TOKEN", raising=False)
    monkeypatch.delenv("SLACK_SIGNING_SECRET", raising=False)

    with pytest.raises(RuntimeError):
        build_app(store)


@pytest.mark.parametrize("text", [
    "search ranges &amp; views",
    "search optional&lt;T&amp;&gt; ranges",
])
def test_reply_unescapes_slack_entities_before_search(text: str) -> None:
    store = SnapshotStore()
    store.load({"P1234R0": {"title": "Ranges & views: optional<T&>", "link": "https://wg21.link/p1234r0"}})
    say = MagicMock()

    reply_to_message(store, {"text": text, "channel_type": "im"}, BOT_ID, say)

    say.assert_called_once()
    assert say.call_args.kwargs["text"] == "<https://wg21.link/p1234r0|P1234R0: Ranges & views: optional<T&>>"
