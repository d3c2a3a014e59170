import pytest

from models import Paper
from normalizer import assign_badges, current_year, enrich, normalize_source

YEAR = 2026


def _paper(source: str = "OpenAlex", citations: int = 0, year: int = 0, tags: tuple[str, ...] = ()) -> Paper:
    return Paper(
        title="Attention Is All You Need",
        summary="Transformers.",
        link="https://example.org/paper",
        authors=("A. Vaswani",),
        source=source,
        year=year,
        citations=citations,
        tags=tags,
    )


@pytest.mark.parametrize("raw, expected", [
    ("IEEE Transactions", "IEEE"),
    ("ieee access", "IEEE"),
    ("arXiv (Cornell University)", "arXiv"),
    ("ARXIV", "arXiv"),
    ("OpenAlex", "OpenAlex"),
    ("Springer Nature", "Springer"),
    ("Elsevier BV", "Elsevier"),
    ("Proceedings of the ACM on Programming Languages", "ACM"),
    ("randomjournal", "Randomjournal"),
    ("NATURE Communications", "Nature communications"),
])
def test_normalize_source(raw: str, expected: str) -> None:
    assert normalize_source(raw) == expected


def test_normalize_source_empty_is_unknown() -> None:
    assert normalize_source("") == "Unknown"
    assert normalize_source(None) == "Unknown"


def test_normalize_source_first_table_hit_wins() -> None:
    """arxiv is checked before acm, so a name containing both maps to arXiv."""
    assert normalize_source("acm mirror of arxiv") == "arXiv"


def test_assign_badges_all_three() -> None:
    badges = assign_badges(_paper(source="arXiv", citations=50, year=YEAR), YEAR)
    assert set(badges) == {"Highly Cited", "Open Access", "New"}
    assert len(badges) == 3


def test_assign_badges_none() -> None:
    assert assign_badges(_paper(source="Springer", citations=49, year=YEAR - 2), YEAR) == []


def test_assign_badges_new_covers_previous_year_only() -> None:
    assert "New" in assign_badges(_paper(year=YEAR - 1), YEAR)
    assert "New" not in assign_badges(_paper(year=YEAR - 2), YEAR)


def test_assign_badges_unknown_year_is_never_new() -> None:
    assert "New" not in assign_badges(_paper(year=0), YEAR)


def test_assign_badges_defaults_to_current_year() -> None:
    assert "New" in assign_badges(_paper(year=current_year()))


def test_enrich_overwrites_provider_tags_and_canonicalizes_source() -> None:
    paper = _paper(source="arxiv.org", citations=120, year=YEAR, tags=("Computer Science",))

    (enriched,) = enrich([paper], YEAR)

    assert enriched.source == "arXiv"
    assert enriched.tags == ("Highly Cited", "Open Access", "New")
    assert paper.source == "arxiv.org"  # original record untouched


def test_enrich_keeps_order() -> None:
    papers = [_paper(source=s) for s in ("ieee", "springer", "")]
    assert [p.source for p in enrich(papers, YEAR)] == ["IEEE", "Springer", "Unknown"]
