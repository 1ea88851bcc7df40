#!/usr/bin/env python3
# build_charts.py
# Reads the repository export, aggregates it and writes the three profile charts:
#   output-bytes.svg    languages by total bytes        (donut)
#   output-count.svg    languages by repository count   (donut)
#   output-commits.svg  commits by hour of day           (bars)
# Paths default to [paths] in Configs/config.toml; any failure exits with status 1.

from __future__ import annotations

import argparse
import dataclasses
import sys
from pathlib import Path
from typing import List, Sequence

from bar_chart import generate_bar_chart
from chart_style import CFG, HERE, StyleConfig, load_cfg, style_from_config
from donut import generate_donut
from lang_stats import (
    TARGET_LANGUAGES,
    TIMEZONE,
    commit_hour_counts,
    language_bytes,
    load_repositories,
    main_language_counts,
)
from logging_config import get_logger, setup_logging

logger = get_logger(__name__)

BYTES_CHART = ("output-bytes.svg", "Total Bytes")
COUNT_CHART = ("output-count.svg", "Repository Count")
COMMITS_CHART = ("output-commits.svg", "Commits by Hour")


def build_all(
    repos: List[dict],
    out_dir: Path,
    style: StyleConfig,
    targets: Sequence[str] = TARGET_LANGUAGES,
    tz: str = TIMEZONE,
) -> List[Path]:
    out_dir.mkdir(parents=True, exist_ok=True)
    emitted = []

    name, title = BYTES_CHART
    emitted.append(generate_donut(language_bytes(repos, targets), out_dir / name, title, style))

    name, title = COUNT_CHART
    emitted.append(generate_donut(main_language_counts(repos, targets), out_dir / name, title, style))

    name, title = COMMITS_CHART
    emitted.append(generate_bar_chart(commit_hour_counts(repos, tz), out_dir / name, title, style))
    return emitted


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render language and commit-hour charts as SVG.")
    parser.add_argument("--input", help="JSON export of repositories (default: [paths].input)")
    parser.add_argument("--out-dir", help="Directory for the SVG files (default: [paths].out_dir)")
    parser.add_argument("--config", help="Alternative config.toml")
    parser.add_argument("--log-level", default="INFO")
    parser.add_argument("--json-logs", action="store_true", help="Emit JSON log lines")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(json_output=args.json_logs, log_level=args.log_level)

    try:
        cfg = load_cfg(Path(args.config)) if args.config else CFG
        paths = cfg.get("paths", {})
        github = cfg.get("github", {})
        input_path = Path(args.input) if args.input else HERE / paths.get("input", "stats.json")
        out_dir = Path(args.out_dir) if args.out_dir else HERE / paths.get("out_dir", "charts")
        targets = github.get("target_languages", TARGET_LANGUAGES)
        tz = github.get("timezone", TIMEZONE)

        style = style_from_config(cfg)
        if "caption" not in cfg.get("bar", {}):
            style = dataclasses.replace(style, caption=f"Hour of day ({tz})")

        repos = load_repositories(input_path)
        emitted = build_all(repos, out_dir, style, targets, tz)
    except Exception:
        logger.exception("Chart build failed")
        return 1

    logger.info("Emitted %d charts to '%s'", len(emitted), out_dir)
    return 0


if __name__ == "__main__":
    sys.exit(main())
