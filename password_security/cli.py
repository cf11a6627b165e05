"""
cli.py

Command line front end:
 - strength score (0-100), level and entropy
 - policy violations
 - breach (leak) check via the range API, unless --no-breach-check
 - --generate LENGTH prints a random compliant password
"""

from __future__ import annotations
import argparse
import getpass
import json
import logging
import os
import sys
from typing import List, Optional

from .breach import DEFAULT_API_URL, DEFAULT_TIMEOUT
from .engine import PasswordSecurity
from .policy import DEFAULT_FORBIDDEN_PATTERNS, PolicyConfig, PolicyResult

logger = logging.getLogger(__name__)

# --- utilities ---
def load_word_list(path: str) -> List[str]:
    """One pattern per line; blank lines ignored. Missing file -> empty list."""
    if not path or not os.path.isfile(path):
        logger.warning("forbidden pattern file not found: %s", path)
        return []
    words = []
    with open(path, "r", encoding="utf-8", errors="ignore") as fh:
        for ln in fh:
            p = ln.strip()
            if p:
                words.append(p.lower())
    return words

def build_policy(args: argparse.Namespace) -> PolicyConfig:
    forbidden = list(DEFAULT_FORBIDDEN_PATTERNS)
    if args.forbidden_file:
        forbidden.extend(w for w in load_word_list(args.forbidden_file) if w not in forbidden)
    return PolicyConfig(
        min_length=args.min_length,
        min_strength_score=args.min_score,
        check_breaches=not args.no_breach_check,
        forbidden_patterns=tuple(forbidden),
    )

# --- output ---
def print_report(result: PolicyResult, out=None):
    out = out or sys.stdout
    s = result.strength
    print(f"Score: {s.score} / 100    Level: {s.level.value}", file=out)
    print(f"Entropy estimate: {s.entropy_bits:.1f} bits", file=out)
    if s.requirements:
        print("Requirements:", file=out)
        for r in s.requirements:
            print(f" [{'x' if r.met else ' '}] {r.text}", file=out)
    if result.breach is None:
        print("Leak-check: not performed", file=out)
    elif result.breach.error is not None:
        print(f"Leak-check: failed ({result.breach.error.value}), breach status unknown", file=out)
    elif result.breach.is_breached:
        print(f"Leak-check: found {result.breach.count} matches in breach data (unsafe).", file=out)
    else:
        print("Leak-check: no matches in breach data", file=out)
    if result.violations:
        print("\nPolicy violations:", file=out)
        for v in result.violations:
            print(" -", v, file=out)
    else:
        print("\nPolicy: satisfied", file=out)
    if s.feedback:
        print("\nSuggestions:", file=out)
        for tip in s.feedback:
            print(" •", tip, file=out)

# --- CLI main ---
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="password-security",
                                     description="Password strength, policy and breach checker")
    parser.add_argument("password", nargs="?", help="Password to check (omit for a hidden prompt)")
    parser.add_argument("--generate", type=int, metavar="LENGTH", help="Print a random compliant password and exit")
    parser.add_argument("--no-breach-check", action="store_true", help="Skip the breach range lookup")
    parser.add_argument("--min-length", type=int, default=8, help="Minimum password length (default: 8)")
    parser.add_argument("--min-score", type=int, default=60, help="Minimum strength score (default: 60)")
    parser.add_argument("--forbidden-file", metavar="path", help="Extra forbidden patterns, one per line")
    parser.add_argument("--api-url", default=DEFAULT_API_URL, help="Range API base URL")
    parser.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT, help="Range API timeout in seconds")
    parser.add_argument("--json", action="store_true", help="Emit the result as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser

def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    with PasswordSecurity.create(api_url=args.api_url, timeout=args.timeout) as engine:
        if args.generate is not None:
            try:
                print(engine.generate_secure_password(args.generate))
            except ValueError as e:
                parser.error(str(e))
            return 0

        try:
            policy = build_policy(args)
        except ValueError as e:
            parser.error(str(e))

        pw = args.password
        if pw is None:
            try:
                pw = getpass.getpass("Enter password to test: ")
            except (KeyboardInterrupt, EOFError):
                print("\nExiting.", file=sys.stderr)
                return 1

        result = engine.validate_password_policy(pw, policy)
        if args.json:
            print(json.dumps(result.to_dict(), indent=2))
        else:
            print_report(result)
        return 0 if result.is_valid else 1

if __name__ == "__main__":
    sys.exit(main())
