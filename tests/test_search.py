from aliasgui.models import AliasRecord
from aliasgui.search import filter_records

RECORDS = [
    AliasRecord(name="gs", command="git status"),
    AliasRecord(name="gco", command="git checkout ...", has_params=True),
    AliasRecord(name="ll", command="ls -la"),
]


def test_empty_query_returns_everything():
    assert filter_records(RECORDS, "  ") == RECORDS


def test_substring_matches_name_or_command():
    assert [r.name for r in filter_records(RECORDS, "GIT")] == ["gs", "gco"]
    assert [r.name for r in filter_records(RECORDS, "ll")] == ["ll"]


def test_substring_does_not_tolerate_typos():
    assert filter_records(RECORDS, "chekout") == []


def test_fuzzy_tolerates_typos():
    results = filter_records(RECORDS, "chekout", fuzzy=True)

    assert results[0].name == "gco"


def test_fuzzy_threshold_excludes_unrelated():
    assert filter_records(RECORDS, "zzzzqqq", fuzzy=True) == []
