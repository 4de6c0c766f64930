#!/usr/bin/env python3
"""Batch-price an option book through the Greeks engine.

Usage
-----
    python scripts/price_book.py --input book.csv --output prices.csv
    python scripts/price_book.py --input book.csv --output prices.json

Input CSV format
----------------
    id,spot,strike,days_to_expiry,volatility,risk_free_rate
    1,25142,25100,7,15,6.5
    2,25142,25300,7,14.2,
    3,81200,81000,30,13.5,6.5

``risk_free_rate`` may be blank or absent; the configured default
(``GREEKS_RISK_FREE_RATE``, 6.5 unless overridden) is used.

Output
------
    CSV or JSON with columns: id, callPrice, putPrice, delta, gamma, theta,
    vega, rho, error
"""

from __future__ import annotations
import argparse
import csv
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from greeksengine.black_scholes import compute_greeks
from greeksengine.config import settings, configure_logging
from greeksengine.core import InvalidParameters

logger = logging.getLogger("price_book")


def _num(row: dict, key: str) -> float:
    raw = (row.get(key) or "").strip()
    try:
        return float(raw)
    except ValueError:
        raise InvalidParameters(key, raw, "not a number")


def _price_row(row: dict) -> dict:
    """Price a single book row and return result dict."""
    rate_raw = (row.get("risk_free_rate") or "").strip()
    rate = float(rate_raw) if rate_raw else settings.risk_free_rate
    res = compute_greeks(
        _num(row, "spot"),
        _num(row, "strike"),
        _num(row, "days_to_expiry"),
        _num(row, "volatility"),
        rate,
    )
    return {"id": row.get("id", ""), **res.to_dict(), "error": None}


def price_rows(rows: list[dict]) -> list[dict]:
    results = []
    for i, row in enumerate(rows):
        try:
            results.append(_price_row(row))
        except ValueError as e:
            logger.warning("row %d (id=%s) rejected: %s", i, row.get("id", "?"), e)
            results.append({"id": row.get("id", ""), "error": str(e)})
    return results


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Batch-price an option book."
    )
    parser.add_argument("--input", required=True, help="Path to book CSV")
    parser.add_argument("--output", required=True, help="Output path (.csv or .json)")
    args = parser.parse_args(argv)
    configure_logging("INFO")

    with open(args.input, newline="") as f:
        rows = list(csv.DictReader(f))

    logger.info("pricing %d positions", len(rows))
    results = price_rows(rows)

    output_path = Path(args.output)
    if output_path.suffix == ".json":
        with open(output_path, "w") as f:
            json.dump(results, f, indent=2)
    else:
        fieldnames = ["id", "callPrice", "putPrice", "delta", "gamma",
                      "theta", "vega", "rho", "error"]
        with open(output_path, "w", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames, extrasaction="ignore")
            writer.writeheader()
            writer.writerows(results)

    failed = sum(1 for r in results if r.get("error"))
    logger.info("priced %d | failed %d -> %s", len(results) - failed, failed, args.output)


if __name__ == "__main__":
    main()
