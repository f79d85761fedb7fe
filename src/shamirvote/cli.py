"""Command line: recover the secret of one or more fragment-set files."""

import argparse
import json
import logging
import sys
from dataclasses import replace

from shamirvote.config import load_config, with_overrides
from shamirvote.errors import RecoveryError
from shamirvote.fragments import load_fragment_set
from shamirvote.log import setup_logger
from shamirvote.recover import find_suspects, recover_fragment_set

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="shamirvote",
        description="Reconstruct secrets from possibly corrupted Shamir fragments "
                    "by majority vote over every k-subset.")
    p.add_argument("files", nargs="+", metavar="FILE",
                   help="fragment-set JSON files")
    p.add_argument("--config", default=None, help="YAML or JSON config file")
    p.add_argument("--strict", action="store_true", default=None,
                   help="fail when no candidate has a unique majority")
    p.add_argument("--workers", type=int, default=None,
                   help="worker processes for the subset vote")
    p.add_argument("--max-combinations", type=int, default=None,
                   help="refuse inputs with more subsets than this (0 = no limit)")
    p.add_argument("--log-level", default=None)
    p.add_argument("--log-file", default=None)
    p.add_argument("--suspects", action="store_true",
                   help="list fragments that are off the winning polynomial")
    p.add_argument("--json", action="store_true", dest="as_json",
                   help="print one JSON document with every result")
    return p


def result_to_dict(path: str, fragment_set, result, suspects=None) -> dict:
    out = {
        "file": path,
        "n": fragment_set.n,
        "k": fragment_set.k,
        "secret": str(result.secret),
        "supporting_combinations": result.supporting_combinations,
        "total_combinations": result.total_combinations,
        "ambiguous": result.ambiguous,
    }
    if result.ambiguous:
        out["tied"] = [str(c) for c in result.tied]
    if suspects is not None:
        out["suspects"] = [s.x for s in suspects]
    return out


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
        config = with_overrides(config, strict_majority=args.strict,
                                workers=args.workers, log_level=args.log_level)
        if args.max_combinations is not None:
            config = replace(config, max_combinations=args.max_combinations or None)
    except (OSError, ValueError) as e:
        print(f"shamirvote: config error: {e}", file=sys.stderr)
        return 2

    setup_logger(level=config.log_level, log_file=args.log_file)

    reports = []
    failed = 0
    for path in args.files:
        try:
            fragment_set = load_fragment_set(path)
            result = recover_fragment_set(fragment_set, config)
        except (RecoveryError, OSError) as e:
            logger.error("%s: %s", path, e)
            reports.append({"file": path, "error": str(e),
                            "kind": e.kind.value if isinstance(e, RecoveryError) else "IOError"})
            failed += 1
            continue

        suspects = find_suspects(fragment_set.points, result) if args.suspects else None
        reports.append(result_to_dict(path, fragment_set, result, suspects))
        if not args.as_json:
            print(f"{path}: n={fragment_set.n} k={fragment_set.k}")
            print(f"  secret f(0) = {result.secret}")
            print(f"  found in {result.supporting_combinations} of "
                  f"{result.total_combinations} combinations")
            if result.ambiguous:
                others = [str(c) for c in result.tied if c != result.secret]
                print(f"  AMBIGUOUS: tied with {', '.join(others)}")
            if suspects:
                print(f"  suspect fragments: {', '.join(str(s.x) for s in suspects)}")

    if args.as_json:
        print(json.dumps(reports, indent=2))
    else:
        print("Secrets:")
        for report in reports:
            print(f"  {report['file']} -> {report.get('secret', 'ERROR: ' + report.get('error', ''))}")

    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
