"""Chat message dispatch: turns raw message text into a reply, or None.

Two entry points share the same resolver and engine:

- ``parse_command``: explicit requests (bot mention or direct message),
  ``search [type:<t>] words...`` or an identifier as the first word.
- ``scan_passive_mention``: any other channel message containing ``[ID]``.
"""

from __future__ import annotations

import logging

from engine import answer
from identifiers import match_bracketed_identifier, match_identifier
from models import QueryRequest
from render import render_result
from store import Snapshot

LOGGER = logging.getLogger(__name__)

SEARCH_COMMAND = "search"
TYPE_FILTER_PREFIX = "type:"
DIRECT_MESSAGE_CHANNEL_TYPE = "im"


def mention_prefix(bot_user_id: str | None) -> str | None:
    return f"<@{bot_user_id}>" if bot_user_id else None


def parse_command(words: list[str]) -> QueryRequest | None:
    """Interpret the words of an explicit request; None when it is not one of ours."""
    if not words:
        return None

    if words[0].lower() == SEARCH_COMMAND:
        rest = words[1:]
        type_filter: str | None = None
        if rest and rest[0].lower().startswith(TYPE_FILTER_PREFIX):
            type_filter = rest[0][len(TYPE_FILTER_PREFIX):] or None
            rest = rest[1:]
        return QueryRequest(kind="search", raw_text=" ".join(rest), type_filter=type_filter)

    paper_id = match_bracketed_identifier(words[0]) or match_identifier(words[0])
    if paper_id is not None:
        return QueryRequest(kind="lookup", raw_text=paper_id)
    return None


def scan_passive_mention(text: str) -> QueryRequest | None:
    """Detect an ambient ``[ID]`` mention anywhere in a message."""
    paper_id = match_bracketed_identifier(text)
    if paper_id is None:
        return None
    return QueryRequest(kind="lookup", raw_text=paper_id)


def route_message(text: str, bot_user_id: str | None, channel_type: str | None) -> QueryRequest | None:
    text = text or ""
    prefix = mention_prefix(bot_user_id)
    mentioned = prefix is not None and text.startswith(prefix)

    if mentioned:
        return parse_command(text[len(prefix):].split())
    if channel_type == DIRECT_MESSAGE_CHANNEL_TYPE:
        return parse_command(text.split())
    return scan_passive_mention(text)


def handle_message(
    text: str,
    bot_user_id: str | None,
    channel_type: str | None,
    snapshot: Snapshot,
) -> str | None:
    """Return the reply text for a message, or None when the bot should stay quiet."""
    request = route_message(text, bot_user_id, channel_type)
    if request is None:
        return None

    LOGGER.debug("Dispatch: kind=%s raw=%r type=%s", request.kind, request.raw_text, request.type_filter)
    result = answer(snapshot, request)
    return render_result(result, snapshot.catalog)
