"""
`clamm-quote`: compute one swap step from the command line and print it as JSON.

Examples:
    clamm-quote --price-current 1 --price-target 101/100 --liquidity 2000000000000000000 \\
        --exact-in 1000000000000000000 --fee-pips 600
    clamm-quote --sqrt-price-current 79228162514264337593543950336 \\
        --sqrt-price-target 39614081257132168796771975168 --liquidity 1000000 --amount-remaining -250000 --fee-pips 3000
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Optional, Sequence, Tuple

from .core.config import SwapStepConfig
from .core.swap_math import compute_swap_step
from .kernels.python.errors import SwapMathError, SwapStepInvariantError
from .kernels.python.sqrt_price_math import encode_sqrt_price_x96
from .kernels.python.swap_step import AmountSpec, ExactIn, ExactOut, amount_spec_from_signed

logger = logging.getLogger(__name__)


def _parse_ratio(raw: str) -> Tuple[int, int]:
    """Parse `"a/b"` or `"a"` into (amount1, amount0)."""
    s = raw.strip()
    if "/" in s:
        num_s, den_s = s.split("/", 1)
    else:
        num_s, den_s = s, "1"
    try:
        num, den = int(num_s.strip()), int(den_s.strip())
    except ValueError:
        raise ValueError(f"price must be an integer ratio like 101/100, got {raw!r}") from None
    if num <= 0 or den <= 0:
        raise ValueError(f"price ratio must be positive, got {raw!r}")
    return num, den


def _resolve_price(sqrt_price: Optional[int], ratio: Optional[str], label: str) -> int:
    if sqrt_price is not None and ratio is not None:
        raise ValueError(f"give either --sqrt-price-{label} or --price-{label}, not both")
    if sqrt_price is not None:
        return sqrt_price
    if ratio is not None:
        return encode_sqrt_price_x96(*_parse_ratio(ratio))
    raise ValueError(f"one of --sqrt-price-{label} / --price-{label} is required")


def _resolve_amount(args: argparse.Namespace) -> AmountSpec:
    if args.exact_in is not None:
        return ExactIn(args.exact_in)
    if args.exact_out is not None:
        return ExactOut(args.exact_out)
    return amount_spec_from_signed(args.amount_remaining)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="clamm-quote", description="Compute one concentrated-liquidity swap step")
    ap.add_argument("--sqrt-price-current", type=int, default=None)
    ap.add_argument("--sqrt-price-target", type=int, default=None)
    ap.add_argument("--price-current", type=str, default=None, help="token1/token0 ratio, e.g. 1 or 101/100")
    ap.add_argument("--price-target", type=str, default=None, help="token1/token0 ratio, e.g. 1 or 101/100")
    ap.add_argument("--liquidity", type=int, required=True)
    amount = ap.add_mutually_exclusive_group(required=True)
    amount.add_argument("--exact-in", type=int, default=None)
    amount.add_argument("--exact-out", type=int, default=None)
    amount.add_argument("--amount-remaining", type=int, default=None, help="signed: >= 0 exact-in, < 0 exact-out")
    ap.add_argument("--fee-pips", type=int, default=3000)
    ap.add_argument("--no-verify", action="store_true", help="skip post-condition checks")
    ap.add_argument(
        "--log-level",
        type=str.upper,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return ap


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    try:
        current = _resolve_price(args.sqrt_price_current, args.price_current, "current")
        target = _resolve_price(args.sqrt_price_target, args.price_target, "target")
        amount = _resolve_amount(args)
        config = SwapStepConfig(verify_postconditions=False) if args.no_verify else SwapStepConfig.from_env()
        result = compute_swap_step(current, target, args.liquidity, amount, args.fee_pips, config=config)
    except (TypeError, ValueError, SwapMathError, SwapStepInvariantError) as e:
        logger.debug("quote failed", exc_info=True)
        print(f"[clamm-quote] FAIL: {e}", file=sys.stderr)
        return 2

    out = {
        "sqrt_price_current_x96": current,
        "sqrt_price_target_x96": target,
        "liquidity": args.liquidity,
        "mode": "exact_in" if isinstance(amount, ExactIn) else "exact_out",
        "amount": amount.amount,
        "fee_pips": args.fee_pips,
        "sqrt_price_next_x96": result.sqrt_price_next_x96,
        "amount_in": result.amount_in,
        "amount_out": result.amount_out,
        "fee_amount": result.fee_amount,
        "falling_price": result.falling_price,
        "reached_target": result.reached_target,
    }
    print(json.dumps(out, indent=2, sort_keys=True))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
