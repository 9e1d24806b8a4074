from models import PaperRecord
from search_index import SearchDocument, SearchIndex, tokenize


def _record(
    paper_id: str,
    title: str,
    author: str | None = None,
    date: str | None = None,
    type: str | None = "paper",
) -> PaperRecord:
    return PaperRecord(
        paper_id=paper_id,
        title=title,
        link=f"https://wg21.link/{paper_id.lower()}",
        author=author,
        date=date,
        type=type,
    )


def _index(*records: PaperRecord) -> SearchIndex:
    return SearchIndex(SearchDocument.from_record(record) for record in records)


def test_tokenize_is_lowercase_words() -> None:
    assert tokenize("Concepts: std::vector, P1234R0!") == ["concepts", "std", "vector", "p1234r0"]


def test_search_document_blob_joins_id_title_author_date() -> None:
    doc = SearchDocument.from_record(_record("P1234R0", "Concepts Lite", author="A. Sutton", date="2021-01-01"))

    assert doc.blob == "P1234R0 Concepts Lite A. Sutton 2021-01-01"
    assert doc.type == "paper"
    assert doc.date == "2021-01-01"


def test_search_matches_title_and_author_words() -> None:
    index = _index(
        _record("P0001R0", "Concepts for everyone", author="Jane Roe"),
        _record("P0002R0", "Modules", author="John Doe"),
    )

    assert index.search("concepts") == ["P0001R0"]
    assert index.search("DOE") == ["P0002R0"]


def test_search_is_strict_word_match() -> None:
    index = _index(_record("P0001R0", "Concepts for everyone"))

    assert index.search("concept") == []
    assert index.search("concepts") == ["P0001R0"]


def test_search_requires_every_token() -> None:
    index = _index(
        _record("P0001R0", "Concepts for ranges"),
        _record("P0002R0", "Concepts for modules"),
    )

    assert index.search("concepts ranges") == ["P0001R0"]
    assert index.search("concepts coroutines") == []


def test_search_matches_identifier_prefix() -> None:
    index = _index(
        _record("P1234R0", "First"),
        _record("P1234R1", "Second"),
        _record("P1299R0", "Third"),
        _record("N4861", "Working Draft"),
    )

    assert sorted(index.search("p1234")) == ["P1234R0", "P1234R1"]
    assert sorted(index.search("P12")) == ["P1234R0", "P1234R1", "P1299R0"]
    assert index.search("n48") == ["N4861"]


def test_search_type_filter_excludes_other_types() -> None:
    index = _index(
        _record("P0001R0", "Concepts are broken", type="paper"),
        _record("CWG123", "Concepts are broken", type="issue"),
    )

    assert index.search("concepts", type="issue") == ["CWG123"]
    assert index.search("concepts", type="paper") == ["P0001R0"]
    assert sorted(index.search("concepts")) == ["CWG123", "P0001R0"]


def test_search_returns_every_match_uncapped() -> None:
    records = [_record(f"P{n:04d}R0", "Contracts") for n in range(100)]
    index = _index(*records)

    assert len(index.search("contracts")) == 100


def test_adjacent_terms_rank_above_distant_ones() -> None:
    index = _index(
        _record("P0001R0", "Ranges and a long list of unrelated words then views"),
        _record("P0002R0", "Ranges views"),
    )

    assert index.search("ranges views") == ["P0002R0", "P0001R0"]


def test_search_blank_query_returns_nothing() -> None:
    index = _index(_record("P0001R0", "Anything"))

    assert index.search("") == []
    assert index.search("   ") == []


def test_search_is_deterministic() -> None:
    index = _index(*[_record(f"P{n:04d}R0", "Reflection") for n in (7, 3, 5)])

    assert index.search("reflection") == index.search("reflection") == ["P0003R0", "P0005R0", "P0007R0"]
