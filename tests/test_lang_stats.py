"""Tests for aggregating exported repository records."""
from __future__ import annotations

import json
from pathlib import Path

import pytest

from lang_stats import commit_hour_counts, language_bytes, load_repositories, main_language_counts

TARGETS = ["TypeScript", "Dart", "Python", "C#", "Rust"]


@pytest.fixture
def repos() -> list[dict]:
    return [
        {
            "name": "api",
            "language": "Python",
            "languages": {"Python": 100, "Shell": 5},
            "commits": ["2024-05-01T00:30:00Z", "2024-05-01T05:10:00+00:00"],
        },
        {
            "name": "web",
            "language": "TypeScript",
            "languages": {"TypeScript": 300, "Python": 50},
            "commits": ["2024-05-02T14:00:00Z"],
        },
        {"name": "notes", "language": None, "languages": {}, "commits": []},
        {"name": "tool", "language": "Go", "languages": {"Go": 10}},
    ]


def test_language_bytes_sums_targets_in_first_seen_order(repos) -> None:
    totals = language_bytes(repos, TARGETS)
    assert totals == {"Python": 150, "TypeScript": 300}
    assert list(totals) == ["Python", "TypeScript"]
    assert all(type(v) is int for v in totals.values())


def test_language_bytes_without_matches() -> None:
    assert language_bytes([{"name": "x", "languages": {"Go": 1}}], TARGETS) == {}
    assert language_bytes([], TARGETS) == {}


def test_main_language_counts_skips_unknown_and_untracked(repos) -> None:
    assert main_language_counts(repos, TARGETS) == {"Python": 1, "TypeScript": 1}
    assert main_language_counts(repos + [{"name": "ml", "language": "Python"}], TARGETS) == {
        "Python": 2,
        "TypeScript": 1,
    }


def test_main_language_counts_empty() -> None:
    assert main_language_counts([], TARGETS) == {}


def test_commit_hours_in_local_time(repos) -> None:
    assert commit_hour_counts(repos, "Asia/Tokyo") == {9: 1, 14: 1, 23: 1}
    assert commit_hour_counts(repos, "UTC") == {0: 1, 5: 1, 14: 1}


def test_commit_hours_without_commits() -> None:
    assert commit_hour_counts([{"name": "x"}], "UTC") == {}


def test_load_repositories(tmp_path: Path, repos) -> None:
    wrapped = tmp_path / "wrapped.json"
    wrapped.write_text(json.dumps({"repositories": repos}), encoding="utf-8")
    bare = tmp_path / "bare.json"
    bare.write_text(json.dumps(repos), encoding="utf-8")

    assert load_repositories(wrapped) == repos
    assert load_repositories(bare) == repos


def test_load_repositories_rejects_bad_shape(tmp_path: Path) -> None:
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"repositories": {"name": "x"}}), encoding="utf-8")
    with pytest.raises(ValueError):
        load_repositories(path)


def test_load_repositories_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_repositories(tmp_path / "nope.json")
