import argparse
import json
import logging
import sys

from .config import settings, configure_logging
from .core import CALL, PUT
from .black_scholes import compute_greeks, implied_vol
from .chain import price_chain
from .max_pain import max_pain, pain_curve, put_call_ratio, estimate_max_pain
from .quotes import price_change

logger = logging.getLogger(__name__)


def _kind(s: str):
    s = s.lower()
    if s in {"call", "c", "ce"}:
        return CALL
    if s in {"put", "p", "pe"}:
        return PUT
    raise argparse.ArgumentTypeError("kind must be 'call' or 'put'")


def _floats(s: str) -> list[float]:
    try:
        values = [float(x) for x in s.split(",") if x.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected comma-separated numbers, got {s!r}")
    if not values:
        raise argparse.ArgumentTypeError("expected at least one number")
    return values


def _emit(obj):
    print(json.dumps(obj, indent=2))


def add_common(parser: argparse.ArgumentParser):
    parser.add_argument("--spot", type=float, required=True)
    parser.add_argument("--days", type=float, required=True, help="calendar days to expiry")
    parser.add_argument("--rate", type=float, default=settings.risk_free_rate,
                        help="risk-free rate, percent")


def cmd_greeks(args):
    res = compute_greeks(args.spot, args.strike, args.days, args.vol, args.rate)
    _emit(res.to_dict())


def cmd_iv(args):
    vol = implied_vol(args.spot, args.strike, args.days, args.premium,
                      args.kind, args.rate)
    _emit({"impliedVolatility": round(vol, 4)})


def cmd_chain(args):
    vols = args.vol[0] if len(args.vol) == 1 else args.vol
    rows = price_chain(args.spot, args.strikes, args.days, vols, args.rate)
    out = []
    for row in rows:
        if row.ok:
            out.append({"strike": row.strike, **row.result.to_dict()})
        else:
            out.append({"strike": row.strike, "error": str(row.error)})
    _emit(out)


def cmd_maxpain(args):
    if args.spot is not None:
        _emit({"maxPain": estimate_max_pain(sum(args.call_oi), sum(args.put_oi), args.spot)})
        return
    _emit({
        "maxPain": max_pain(args.strikes, args.call_oi, args.put_oi),
        "pcr": round(put_call_ratio(args.call_oi, args.put_oi), 4),
        "pain": [float(x) for x in pain_curve(args.strikes, args.call_oi, args.put_oi)],
    })


def cmd_change(args):
    ch = price_change(args.price, args.previous_close)
    _emit({"change": ch.change, "changePct": ch.change_pct})


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="greeksengine",
                                description="Black-Scholes Greeks and option-chain analytics")
    p.add_argument("--log-level", default=None, help="overrides GREEKS_LOG_LEVEL")
    sub = p.add_subparsers(dest="cmd", required=True)

    # Greeks
    p_g = sub.add_parser("greeks", help="prices and Greeks for one strike")
    add_common(p_g)
    p_g.add_argument("--strike", type=float, required=True)
    p_g.add_argument("--vol", type=float, required=True, help="implied vol, percent")
    p_g.set_defaults(func=cmd_greeks)

    # Implied vol
    p_iv = sub.add_parser("iv", help="implied volatility from a premium")
    add_common(p_iv)
    p_iv.add_argument("--strike", type=float, required=True)
    p_iv.add_argument("--premium", type=float, required=True)
    p_iv.add_argument("--kind", type=_kind, default=CALL, help="call|put")
    p_iv.set_defaults(func=cmd_iv)

    # Chain
    p_ch = sub.add_parser("chain", help="Greeks across a list of strikes")
    add_common(p_ch)
    p_ch.add_argument("--strikes", type=_floats, required=True, help="comma-separated")
    p_ch.add_argument("--vol", type=_floats, required=True,
                      help="flat vol, or one per strike (comma-separated)")
    p_ch.set_defaults(func=cmd_chain)

    # Max pain
    p_mp = sub.add_parser("maxpain", help="max-pain strike from open interest")
    p_mp.add_argument("--strikes", type=_floats, required=True)
    p_mp.add_argument("--call-oi", dest="call_oi", type=_floats, required=True)
    p_mp.add_argument("--put-oi", dest="put_oi", type=_floats, required=True)
    p_mp.add_argument("--spot", type=float, default=None,
                      help="use the aggregate-OI estimate around this spot instead")
    p_mp.set_defaults(func=cmd_maxpain)

    # Change vs previous close
    p_c = sub.add_parser("change", help="change against a previous close")
    p_c.add_argument("--price", type=float, required=True)
    p_c.add_argument("--previous-close", dest="previous_close", type=float, required=True)
    p_c.set_defaults(func=cmd_change)

    return p


def main(argv=None):
    p = build_parser()
    args = p.parse_args(argv)
    configure_logging(args.log_level)
    try:
        args.func(args)
    except ValueError as e:
        logger.debug("command %s failed", args.cmd, exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
