"""Slack mrkdwn rendering of query results."""

from __future__ import annotations

from collections.abc import Mapping

from models import NoResults, NotFound, PaperFound, PaperRecord, QueryResult, SearchPage

NOT_FOUND_TEXT = "Sorry, I could not find that paper."
NO_RESULTS_TEXT = "No results."
ISSUE_LINK_BASE = "https://wg21.link"


def slack_link(url: str, label: str) -> str:
    return f"<{url}|{label}>"


def render_related(issue: str, catalog: Mapping[str, PaperRecord] | None = None) -> str:
    """Link one related-issue entry.

    Catalog ids link to the record, other ids to wg21.link, and URLs (GitHub
    issues) to themselves.
    """
    if issue.startswith(("http://", "https://")):
        return slack_link(issue, "GitHub issue")
    record = catalog.get(issue.upper()) if catalog is not None else None
    if record is not None:
        return slack_link(record.link, record.paper_id)
    return slack_link(f"{ISSUE_LINK_BASE}/{issue.lower()}", issue)


def render_paper(record: PaperRecord, catalog: Mapping[str, PaperRecord] | None = None) -> str:
    subgroup = f" [{record.subgroup}]" if record.subgroup else ""
    author = f" (by {record.author})" if record.author else ""
    date = f" ({record.date})" if record.date else ""
    related = [render_related(issue, catalog) for issue in record.related_issues]
    related_text = f" (Related: {', '.join(related)})" if related else ""
    headline = slack_link(record.link, f"{record.paper_id}:{subgroup} {record.title}")
    return f"{headline}{author}{date}{related_text}"


def render_search_page(page: SearchPage, catalog: Mapping[str, PaperRecord]) -> str:
    lines = [render_paper(catalog[paper_id], catalog) for paper_id in page.detailed]
    if page.overflow:
        also = ", ".join(slack_link(catalog[paper_id].link, paper_id) for paper_id in page.overflow)
        lines.append(f"Also: {also}")
    return "\n".join(lines)


def render_result(result: QueryResult, catalog: Mapping[str, PaperRecord]) -> str:
    if isinstance(result, PaperFound):
        return render_paper(result.record, catalog)
    if isinstance(result, NotFound):
        return NOT_FOUND_TEXT
    if isinstance(result, NoResults):
        return NO_RESULTS_TEXT
    return render_search_page(result, catalog)
