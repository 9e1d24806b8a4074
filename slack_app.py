"""Slack Bolt wiring: forwards every message event to bot.handle_message."""

from __future__ import annotations

import html
import logging
import os
from typing import Any, Callable

from slack_bolt import App

from bot import handle_message
from store import SnapshotStore

LOGGER = logging.getLogger(__name__)


def reply_to_message(
    store: SnapshotStore,
    event: dict[str, Any],
    bot_user_id: str | None,
    say: Callable[..., Any],
) -> None:
    """Answer one message event; failures are logged, never raised.

    Slack delivers `&`, `<` and `>` as HTML entities, so the text is unescaped
    before dispatch.
    """
    if event.get("bot_id"):
        return
    try:
        text = handle_message(
            html.unescape(event.get("text") or ""),
            bot_user_id,
            event.get("channel_type"),
            store.current(),
        )
        if text is None:
            return
        say(
            text=text,
            unfurl_links=False,
            unfurl_media=False,
            thread_ts=event.get("thread_ts"),
        )
    except Exception:  # platform errors must not take the bot down
        LOGGER.exception("Failed to handle message event channel=%s", event.get("channel"))


def build_app(store: SnapshotStore) -> App:
    """Create the Bolt app. Requires SLACK_BOT_TOKEN and SLACK_SIGNING_SECRET."""
    token = os.getenv("SLACK_BOT_TOKEN")
    signing_secret = os.getenv("SLACK_SIGNING_SECRET")
    if not token or not signing_secret:
        raise RuntimeError("SLACK_BOT_TOKEN and SLACK_SIGNING_SECRET environment variables are required")

    app = App(token=token, signing_secret=signing_secret)

    @app.event("message")
    def on_message(event: dict[str, Any], context: dict[str, Any], say: Callable[..., Any]) -> None:
        reply_to_message(store, event, context.get("bot_user_id"), say)

    return app
