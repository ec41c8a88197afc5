from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from .config import CompareConfig
from .data import load_series
from .errors import ComparisonError
from .logging_setup import setup_logging
from .pipeline import Comparison, compare
from .report import open_report, write_csv, write_html_report

logger = logging.getLogger(__name__)


def build_parser(defaults: Optional[CompareConfig] = None) -> argparse.ArgumentParser:
    d = defaults or CompareConfig()
    parser = argparse.ArgumentParser(
        prog="etfcompare",
        description="Compare an ETF against a reference index, a fixed blend and a glide path.",
    )
    parser.add_argument("--etf", default=d.etf_symbol, help="ETF symbol")
    parser.add_argument("--index", default=d.index_symbol, help="Reference index symbol")
    parser.add_argument("--start", default=d.start, help="Start date (YYYY-MM-DD)")
    parser.add_argument("--interval", default=d.interval, help="Yahoo interval")
    parser.add_argument("--out", default="", help="Output CSV path (empty for stdout)")
    parser.add_argument("--html", default="", help="Output HTML report path (empty to skip)")
    parser.add_argument("--life-etf", type=float, default=d.life_etf, help="LifeStrategy ETF weight")
    parser.add_argument("--glide-start", type=float, default=d.glide_start, help="Glide path start ETF weight")
    parser.add_argument("--glide-end", type=float, default=d.glide_end, help="Glide path end ETF weight")
    parser.add_argument("--verify", action="store_true", help="Log sample verification rows")
    parser.add_argument("--no-open", action="store_true", help="Do not open the HTML report")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level",
    )
    return parser


def _log_verification(comparison: Comparison, limit: int = 3) -> None:
    sample = comparison.verification_sample(limit)
    logger.info("VERIFY sample rows (monthly closes and returns):")
    logger.info("%s", ",".join(sample.columns))
    for i, row in enumerate(sample.itertuples(index=False)):
        if i == limit and len(comparison) > 2 * limit:
            logger.info("...")
        logger.info(
            "%s,%.2f,%.2f,%.5f,%.5f,%.5f",
            row.Date, row.ETF_Close, row.Index_Close, row.ETF_Return, row.Index_Return, row.Alpha,
        )


def run(config: CompareConfig, out: str = "", html_path: str = "", verify: bool = False, open_html: bool = True) -> Comparison:
    config.validate()

    etf = load_series(config.etf_symbol, config.start, config.interval)
    index = load_series(config.index_symbol, config.start, config.interval)

    comparison = compare(etf, index, config.weights, base=config.base)
    if verify:
        _log_verification(comparison)

    write_csv(comparison, out or None)

    if html_path:
        path = write_html_report(html_path, comparison, config)
        if open_html:
            open_report(path)
    return comparison


def main(argv: Optional[Sequence[str]] = None) -> int:
    try:
        defaults = CompareConfig.from_env()
    except ComparisonError as e:
        setup_logging()
        logger.error("%s", e)
        return 1

    args = build_parser(defaults).parse_args(argv)
    setup_logging(args.log_level)

    config = CompareConfig(
        etf_symbol=args.etf,
        index_symbol=args.index,
        start=args.start,
        interval=args.interval,
        life_etf=args.life_etf,
        glide_start=args.glide_start,
        glide_end=args.glide_end,
        base=defaults.base,
    )
    try:
        run(config, out=args.out, html_path=args.html, verify=args.verify, open_html=not args.no_open)
    except ComparisonError as e:
        logger.error("%s", e)
        return 1
    except OSError as e:
        logger.error("Cannot write output: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
