# lang_stats.py
# Aggregates an exported list of repository records into the mappings the charts draw:
# bytes per language, repositories per main language, commits per hour of day.
# The export is produced elsewhere; nothing here talks to the network.

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Iterable, List, Sequence, Union

import pandas as pd

from chart_style import CFG
from logging_config import get_logger

logger = get_logger(__name__)

TARGET_LANGUAGES: List[str] = list(
    CFG.get("github", {}).get("target_languages", ["TypeScript", "Dart", "Python", "C#", "Rust"])
)
TIMEZONE: str = CFG.get("github", {}).get("timezone", "Asia/Tokyo")


def load_repositories(path: Union[str, Path]) -> List[dict]:
    """Read ``{"repositories": [...]}`` (or a bare list) from a JSON export."""
    with open(path, encoding="utf-8") as f:
        payload = json.load(f)
    repos = payload.get("repositories") if isinstance(payload, dict) else payload
    if not isinstance(repos, list):
        raise ValueError(f"{path}: expected a list of repositories")
    logger.info("Loaded %d repositories from %s", len(repos), path)
    return repos


def language_bytes(repos: Iterable[dict], targets: Sequence[str] = TARGET_LANGUAGES) -> Dict[str, int]:
    """Total bytes per target language across all repositories, in first-seen order."""
    rows = [
        (repo.get("name"), lang, nbytes)
        for repo in repos
        for lang, nbytes in (repo.get("languages") or {}).items()
    ]
    df = pd.DataFrame(rows, columns=["repo", "language", "bytes"])
    df = df[df["language"].isin(targets)]
    if df.empty:
        return {}
    totals = df.groupby("language", sort=False)["bytes"].sum()
    return {lang: int(total) for lang, total in totals.items()}


def main_language_counts(repos: Iterable[dict], targets: Sequence[str] = TARGET_LANGUAGES) -> Dict[str, int]:
    """Number of repositories whose main language is one of ``targets``.

    Repositories without a detected language are skipped.
    """
    df = pd.DataFrame({"language": [repo.get("language") for repo in repos]}, dtype=object)
    df = df.dropna(subset=["language"])
    df = df[df["language"].isin(targets)]
    if df.empty:
        return {}
    counts = df.groupby("language", sort=False).size()
    return {lang: int(n) for lang, n in counts.items()}


def commit_hour_counts(repos: Iterable[dict], tz: str = TIMEZONE) -> Dict[int, int]:
    """Commits per local hour of day; hours without commits are left out."""
    stamps = [ts for repo in repos for ts in (repo.get("commits") or [])]
    if not stamps:
        return {}
    local = pd.to_datetime(pd.Series(stamps), utc=True, format="ISO8601").dt.tz_convert(tz)
    counts = local.dt.hour.value_counts().sort_index()
    return {int(hour): int(n) for hour, n in counts.items()}
