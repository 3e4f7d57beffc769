"""Command-line entry point for PhishScore.

Usage:
    phishscore https://paypa1-login.tk/signin --html saved_page.html
    curl -s https://example.com | phishscore https://example.com --html -
    phishscore http://example.tk --warn-threshold 70 --findings
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from .analyzer import PhishingDetector, collect_signals
from .config import load_config, validate_config
from .utils.allowlist import read_allowlist

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INPUT_ERROR = 1
EXIT_WARN = 3


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="phishscore",
        description="Score a web page for phishing risk and print the JSON result.",
    )
    parser.add_argument("url", help="URL of the page being scored")
    parser.add_argument(
        "--html",
        help="Saved HTML of the page ('-' reads stdin). Without it only the URL is scored.",
    )
    parser.add_argument(
        "--config-dir",
        type=Path,
        default=None,
        help="Directory holding heuristics.yaml and trusted_domains.txt",
    )
    parser.add_argument(
        "--trusted-file",
        type=Path,
        action="append",
        default=[],
        help="Extra trusted-domain list (one per line); may repeat",
    )
    parser.add_argument(
        "--warn-threshold",
        type=int,
        default=None,
        help=f"Exit with status {EXIT_WARN} when the final score reaches this value",
    )
    parser.add_argument(
        "--findings",
        action="store_true",
        help="Include the per-rule breakdown in the output",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("PHISHSCORE_LOG_LEVEL", "WARNING"),
        help="Logging level (default: WARNING)",
    )
    return parser


def _read_html(source: Optional[str]) -> Optional[str]:
    if source is None:
        return None
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8", errors="replace")


def main(argv: Optional[list[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    config = load_config(args.config_dir)
    for path in args.trusted_file:
        if not path.exists():
            logger.warning("Trusted list not found: %s", path)
            continue
        config = config.with_trusted_domains(read_allowlist(path))

    errors = validate_config(config)
    for error in errors:
        logger.error("Config error: %s", error)
    if errors:
        return EXIT_INPUT_ERROR

    try:
        html = _read_html(args.html)
    except OSError as exc:
        print(f"phishscore: cannot read HTML from {args.html}: {exc}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    signals = collect_signals(args.url, html)
    result = PhishingDetector(config).analyze(signals)

    print(result.to_json(include_findings=args.findings, indent=2, ensure_ascii=False))

    if args.warn_threshold is not None and result.should_warn(args.warn_threshold):
        logger.info("Score %s reached warning threshold %s", result.final_score, args.warn_threshold)
        return EXIT_WARN
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
