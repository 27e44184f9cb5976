#!/usr/bin/env python3
"""
Proof of Inference Control CLI (poictl)

Command-line interface for operators and miners.

Commands:
    derive            Print the required words for a seed and difficulty
    verify-text       Check a text file against the text constraints
    check-pow         Check a digest against a difficulty
    mine              Search for a nonce meeting the difficulty
    next-difficulty   Compute the next epoch's difficulty
    reward            Compute the scheduled and payable reward
    rotate-seed       Derive the next epoch's challenge seed

All commands output a single deterministic ASCII line starting with PASS or
FAIL. The exit status is 0 on PASS and 1 on FAIL.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from dotenv import load_dotenv

from poi.config import ConfigError, ProtocolConfig, get_config, load_config
from poi.core import EmissionState
from poi.crypto.hashing import solution_digest
from poi.economics.difficulty import adjust_difficulty
from poi.economics.emission import capped_reward, reward_for
from poi.economics.rotation import next_seed
from poi.lexicon.derive import derive_required_words
from poi.verify.pow import check_difficulty, leading_zero_bits
from poi.verify.submission import mine_nonce
from poi.verify.text import verify_text

logger = logging.getLogger("poictl")


def _hex32(value: str) -> bytes:
    try:
        raw = bytes.fromhex(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"not a hex string: {value!r}") from exc
    if len(raw) != 32:
        raise argparse.ArgumentTypeError(f"expected 32 bytes (64 hex chars), got {len(raw)}")
    return raw


def _hexbytes(value: str) -> bytes:
    try:
        return bytes.fromhex(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"not a hex string: {value!r}") from exc


def _emit(ok: bool, command: str, detail: str = "") -> int:
    line = f"{'PASS' if ok else 'FAIL'} {command}"
    if detail:
        line = f"{line} {detail}"
    print(line)
    return 0 if ok else 1


class PoiCtl:
    """Proof of Inference control interface."""

    def __init__(self, config: ProtocolConfig):
        self.config = config

    def derive(self, seed: bytes, difficulty: int) -> int:
        words = derive_required_words(seed, difficulty)
        return _emit(
            True,
            "derive",
            f"difficulty={difficulty} count={len(words)} words={','.join(words.as_strings())}",
        )

    def verify_text(
        self,
        path: Path,
        seed: Optional[bytes],
        difficulty: int,
        words: Optional[List[str]],
    ) -> int:
        text = path.read_bytes()
        if words is None:
            if seed is None:
                raise SystemExit("verify-text needs --seed or --words")
            required = list(derive_required_words(seed, difficulty))
        else:
            required = [w.encode("ascii") for w in words]
        ok = verify_text(text, required, config=self.config)
        return _emit(ok, "verify-text", f"bytes={len(text)} words={len(required)}")

    def check_pow(self, digest: bytes, difficulty: int) -> int:
        ok = check_difficulty(digest, difficulty)
        return _emit(
            ok,
            "check-pow",
            f"difficulty={difficulty} leading_zero_bits={leading_zero_bits(digest)}",
        )

    def mine(
        self,
        path: Path,
        seed: bytes,
        miner: bytes,
        difficulty: int,
        start: int,
        limit: int,
    ) -> int:
        text = path.read_bytes()
        nonce = mine_nonce(seed, miner, text, difficulty, start=start, limit=limit, config=self.config)
        if nonce is None:
            return _emit(False, "mine", f"difficulty={difficulty} tried={limit}")
        digest = solution_digest(seed, miner, text, nonce, config=self.config)
        return _emit(True, "mine", f"nonce={nonce} digest={digest.hex()}")

    def next_difficulty(self, current: int, solutions: int, target: Optional[int]) -> int:
        new = adjust_difficulty(current, solutions, target=target, config=self.config)
        return _emit(True, "next-difficulty", f"old={current} new={new} solutions={solutions}")

    def reward(self, total_claimed: int, total_supply: int) -> int:
        scheduled = reward_for(total_claimed, config=self.config)
        state = EmissionState(total_accepted_solutions=total_claimed, total_supply=total_supply)
        payable = capped_reward(state, config=self.config)
        return _emit(True, "reward", f"scheduled={scheduled} payable={payable}")

    def rotate_seed(self, seed: bytes, epoch: int, timestamp: int, slot: int) -> int:
        new_seed = next_seed(seed, epoch, timestamp, slot, config=self.config)
        return _emit(True, "rotate-seed", f"epoch={epoch + 1} seed={new_seed.hex()}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="poictl",
        description="Proof of Inference control CLI",
    )
    parser.add_argument("--config", type=Path, help="YAML protocol config overrides")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("derive", help="Print required words")
    p.add_argument("--seed", type=_hex32, required=True)
    p.add_argument("--difficulty", type=int, required=True)

    p = sub.add_parser("verify-text", help="Check a text file")
    p.add_argument("path", type=Path)
    p.add_argument("--seed", type=_hex32)
    p.add_argument("--difficulty", type=int, default=0)
    p.add_argument("--words", help="Comma-separated required words (overrides --seed)")

    p = sub.add_parser("check-pow", help="Check a digest against a difficulty")
    p.add_argument("--digest", type=_hex32, required=True)
    p.add_argument("--difficulty", type=int, required=True)

    p = sub.add_parser("mine", help="Search for a nonce")
    p.add_argument("path", type=Path)
    p.add_argument("--seed", type=_hex32, required=True)
    p.add_argument("--miner", type=_hexbytes, required=True)
    p.add_argument("--difficulty", type=int, required=True)
    p.add_argument("--start", type=int, default=0)
    p.add_argument("--limit", type=int, default=1 << 20)

    p = sub.add_parser("next-difficulty", help="Compute next difficulty")
    p.add_argument("--current", type=int, required=True)
    p.add_argument("--solutions", type=int, required=True)
    p.add_argument("--target", type=int)

    p = sub.add_parser("reward", help="Compute reward for the next claim")
    p.add_argument("--total-claimed", type=int, required=True)
    p.add_argument("--total-supply", type=int, default=0)

    p = sub.add_parser("rotate-seed", help="Derive the next challenge seed")
    p.add_argument("--seed", type=_hex32, required=True)
    p.add_argument("--epoch", type=int, required=True)
    p.add_argument("--timestamp", type=int, required=True)
    p.add_argument("--slot", type=int, required=True)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    load_dotenv()
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    try:
        config = load_config(args.config) if args.config else get_config()
    except ConfigError as exc:
        print(f"FAIL config {exc}", file=sys.stderr)
        return 2

    ctl = PoiCtl(config)
    try:
        return _dispatch(ctl, args)
    except (ValueError, OverflowError) as exc:
        logger.debug("%s failed", args.command, exc_info=True)
        return _emit(False, args.command, str(exc))


def _dispatch(ctl: PoiCtl, args: argparse.Namespace) -> int:
    if args.command == "derive":
        return ctl.derive(args.seed, args.difficulty)
    if args.command == "verify-text":
        words = [w.strip() for w in args.words.split(",") if w.strip()] if args.words else None
        return ctl.verify_text(args.path, args.seed, args.difficulty, words)
    if args.command == "check-pow":
        return ctl.check_pow(args.digest, args.difficulty)
    if args.command == "mine":
        return ctl.mine(args.path, args.seed, args.miner, args.difficulty, args.start, args.limit)
    if args.command == "next-difficulty":
        return ctl.next_difficulty(args.current, args.solutions, args.target)
    if args.command == "reward":
        return ctl.reward(args.total_claimed, args.total_supply)
    if args.command == "rotate-seed":
        return ctl.rotate_seed(args.seed, args.epoch, args.timestamp, args.slot)

    raise ValueError(f"unknown command {args.command}")


if __name__ == "__main__":
    sys.exit(main())
