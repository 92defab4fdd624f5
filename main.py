#!/usr/bin/env python3
"""Price Analyst: price-target analysis of daily OHLCV series.

Usage:
    python main.py analyze prices.csv --symbol AAPL
    python main.py analyze prices.csv --symbol AAPL --consensus aapl_consensus.json
    python main.py analyze prices.csv --symbol AAPL --price 191.2 --previous-close 189.9
    python main.py analyze prices.csv --symbol AAPL --max-bars 0     # use every bar
"""

import argparse
import json
import sys
from pathlib import Path

from price_analyst.analysis.engine import PriceAnalyzer
from price_analyst.config import SETTINGS, log_level
from price_analyst.data import latest_bars, load_price_csv
from price_analyst.errors import PriceAnalystError
from price_analyst.models import QuoteSnapshot
from price_analyst.utils.logger import setup_logger

logger = setup_logger("main", log_level())


# ============================================================
# COMMANDS
# ============================================================

def cmd_analyze(args):
    """Analyse a CSV price history and print the record as JSON."""
    df = load_price_csv(args.prices)
    max_bars = args.max_bars
    if max_bars is None:
        max_bars = SETTINGS.get("data", {}).get("max_bars", 200)
    if max_bars:
        df = latest_bars(df, max_bars)

    quote = None
    if args.price is not None:
        quote = QuoteSnapshot(
            price=args.price,
            previous_close=args.previous_close,
            volume=args.quote_volume or 0.0,
        )

    consensus = None
    if args.consensus:
        with open(args.consensus) as f:
            consensus = json.load(f)
        if not isinstance(consensus, dict):
            print(f"Error: {args.consensus}: consensus must be a JSON object")
            sys.exit(1)

    symbol = args.symbol or Path(args.prices).stem.upper()
    try:
        record = PriceAnalyzer().analyze(symbol, df, quote=quote, consensus=consensus)
    except PriceAnalystError as exc:
        print(f"Error: {exc}")
        sys.exit(1)

    print(json.dumps(record.to_dict(), indent=2 if args.pretty else None))


# ============================================================
# MAIN
# ============================================================

def main():
    parser = argparse.ArgumentParser(
        description="Price Analyst - price-target analysis of daily OHLCV series",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    sub = parser.add_subparsers(dest="command", help="Commands")

    # analyze
    p = sub.add_parser("analyze", help="Analyse a CSV of daily bars")
    p.add_argument("prices", help="CSV with date, open, high, low, close, volume columns")
    p.add_argument("--symbol", help="Ticker symbol (default: file name)")
    p.add_argument("--consensus", help="JSON file with analyst consensus fields")
    p.add_argument("--price", type=float, help="Latest quote price")
    p.add_argument("--previous-close", type=float, help="Previous close for the quote")
    p.add_argument("--quote-volume", type=float, help="Volume for the quote")
    p.add_argument("--max-bars", type=int, default=None,
                   help="Keep only the most recent N bars (0 = all; default from settings)")
    p.add_argument("--pretty", action="store_true", help="Indent the JSON output")
    p.set_defaults(func=cmd_analyze)

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)
    args.func(args)


if __name__ == "__main__":
    main()
