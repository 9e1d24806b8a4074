from catalog import Catalog
from models import NoResults, NotFound, PaperFound, PaperRecord, SearchPage
from render import (
    NO_RESULTS_TEXT,
    NOT_FOUND_TEXT,
    render_paper,
    render_related,
    render_result,
    render_search_page,
)

FULL = PaperRecord(
    paper_id="P2300R7",
    title="std::execution",
    link="https://wg21.link/p2300r7",
    author="Michał Dominiak",
    date="2023-04-21",
    type="paper",
    subgroup="LWG",
    related_issues=("LWG3456", "https://github.com/cplusplus/papers/issues/1054"),
)
MINIMAL = PaperRecord(paper_id="N4861", title="Working Draft", link="https://wg21.link/n4861")


def test_render_paper_full() -> None:
    assert render_paper(FULL) == (
        "<https://wg21.link/p2300r7|P2300R7: [LWG] std::execution>"
        " (by Michał Dominiak) (2023-04-21)"
        " (Related: <https://wg21.link/lwg3456|LWG3456>,"
        " <https://github.com/cplusplus/papers/issues/1054|GitHub issue>)"
    )


def test_render_paper_minimal() -> None:
    assert render_paper(MINIMAL) == "<https://wg21.link/n4861|N4861: Working Draft>"


def test_render_related_prefers_catalog_link() -> None:
    issue = PaperRecord(paper_id="LWG3456", title="Issue", link="https://cplusplus.github.io/LWG/issue3456")
    catalog = Catalog({"LWG3456": issue})

    assert render_related("lwg3456", catalog) == "<https://cplusplus.github.io/LWG/issue3456|LWG3456>"
    assert render_related("CWG1", catalog) == "<https://wg21.link/cwg1|CWG1>"


def test_render_search_page_with_overflow() -> None:
    records = {
        f"P{n:04d}R0": PaperRecord(paper_id=f"P{n:04d}R0", title=f"Paper {n}", link=f"https://wg21.link/p{n:04d}r0")
        for n in range(3)
    }
    page = SearchPage(detailed=("P0000R0", "P0001R0"), overflow=("P0002R0",))

    lines = render_search_page(page, Catalog(records)).split("\n")

    assert lines == [
        "<https://wg21.link/p0000r0|P0000R0: Paper 0>",
        "<https://wg21.link/p0001r0|P0001R0: Paper 1>",
        "Also: <https://wg21.link/p0002r0|P0002R0>",
    ]


def test_render_search_page_without_overflow_has_no_trailer() -> None:
    text = render_search_page(SearchPage(detailed=("N4861",)), Catalog({"N4861": MINIMAL}))

    assert "Also:" not in text


def test_render_result_sentinels() -> None:
    catalog = Catalog({"N4861": MINIMAL})

    assert render_result(NotFound(query="P9999"), catalog) == NOT_FOUND_TEXT
    assert render_result(NoResults(query="nothing"), catalog) == NO_RESULTS_TEXT
    assert render_result(PaperFound(record=MINIMAL), catalog) == render_paper(MINIMAL)
