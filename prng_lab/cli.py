#!/usr/bin/env python3
"""
PRNG Lab command line
======================

Runs the engine operations locally or starts the HTTP API.

Examples:
  prng-lab serve --port 8000
  prng-lab generate mixed_congruential -p x0=7 -p a=5 -p b=3 -p m=16
  prng-lab validate multiplicative_congruential -p x0=1 -p a=3 -p m=17
  prng-lab generate middle_squares -p x0=1234 -p digits=4 --output seq.json
  prng-lab test chi_square --numbers-file seq.json --intervals 10 --alpha 0.05
  prng-lab sample linear --count 1000 --seed 42
"""

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from . import __version__, service
from .config import load_settings
from .errors import InvalidParameterError, PrngLabError

logger = logging.getLogger(__name__)


def _parse_params(pairs: Optional[List[str]]) -> Dict[str, str]:
    params = {}
    for pair in pairs or []:
        if "=" not in pair:
            raise InvalidParameterError(f"Parameter must look like name=value, got {pair!r}")
        name, value = pair.split("=", 1)
        params[name.strip()] = value.strip()
    return params


def _load_numbers(path: str) -> List[Any]:
    """
    Read a sample from a file: a JSON list, a JSON object with a "numbers"
    key (the output of ``generate``), or whitespace/comma separated text.
    """
    with open(path, "r") as f:
        text = f.read()

    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        return [token for token in text.replace(",", " ").split() if token]

    if isinstance(data, dict):
        data = data.get("numbers", [])
    if not isinstance(data, list):
        raise InvalidParameterError(f"No list of numbers found in {path}")
    return data


def _emit(payload: Dict[str, Any], output: Optional[str]):
    text = json.dumps(payload, indent=2, ensure_ascii=False)
    if output:
        with open(output, "w") as f:
            f.write(text + "\n")
        logger.info(f"Wrote {output}")
    else:
        print(text)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="prng-lab",
        description="Pseudorandom number generation, validation and goodness-of-fit tests",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__.split("Examples:", 1)[1] if __doc__ else None,
    )
    parser.add_argument("--settings", type=str, default=None,
                        help="JSON settings file (default: $PRNG_LAB_SETTINGS)")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Start the HTTP API")
    serve.add_argument("--host", type=str, default=None, help="Bind address")
    serve.add_argument("--port", type=int, default=None, help="Port (default: 8000)")
    serve.add_argument("--debug", action="store_true", help="Flask debug mode")

    for name, help_text in (("generate", "Generate a sequence"),
                            ("validate", "Check period theorem conditions")):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("method", choices=[m["id"] for m in service.list_methods()])
        cmd.add_argument("-p", "--param", action="append", metavar="NAME=VALUE",
                         help="Method parameter, repeatable")
        cmd.add_argument("--output", "-o", type=str, default=None, help="Write JSON here")

    test = sub.add_parser("test", help="Run a uniformity test on a sample")
    test.add_argument("test_type", choices=["chi_square", "kolmogorov_smirnov"])
    test.add_argument("--numbers-file", type=str, required=True,
                      help="JSON list, generate output, or plain text sample")
    test.add_argument("--intervals", type=int, default=None, help="Chi-square intervals (default: 10)")
    test.add_argument("--alpha", type=float, default=None, help="Significance level (default: 0.05)")
    test.add_argument("--output", "-o", type=str, default=None, help="Write JSON here")

    sample = sub.add_parser("sample", help="Acceptance-rejection sampling")
    sample.add_argument("distribution", choices=[d["name"] for d in service.list_distributions()])
    sample.add_argument("--count", type=int, required=True, help="Values to accept (1-10000)")
    sample.add_argument("--seed", type=int, default=None, help="Seed for reproducible draws")
    sample.add_argument("--output", "-o", type=str, default=None, help="Write JSON here")

    return parser


def run(args: argparse.Namespace) -> int:
    settings = load_settings(args.settings)

    if args.command == "serve":
        from .web_app import run_server

        overrides = {k: v for k, v in (("host", args.host), ("port", args.port)) if v is not None}
        if overrides:
            settings = settings.model_copy(update=overrides)
        run_server(settings, debug=args.debug)
        return 0

    if args.command == "generate":
        result = service.generate(args.method, _parse_params(args.param), settings)
    elif args.command == "validate":
        result = service.validate(args.method, _parse_params(args.param), settings)
    elif args.command == "test":
        parameters = {}
        if args.intervals is not None:
            parameters["intervals"] = args.intervals
        if args.alpha is not None:
            key = "alpha" if args.test_type == "chi_square" else "significance_level"
            parameters[key] = args.alpha
        result = service.statistical_test(
            _load_numbers(args.numbers_file), args.test_type, parameters, settings
        )
    else:
        result = service.random_variables(args.count, args.distribution, args.seed, settings)

    _emit(result.model_dump(mode="json"), args.output)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    )
    # Suppress Flask request logging
    logging.getLogger('werkzeug').setLevel(logging.INFO if args.verbose else logging.ERROR)

    try:
        return run(args)
    except PrngLabError as e:
        print(json.dumps(e.to_dict(), indent=2, ensure_ascii=False), file=sys.stderr)
        return 2
    except (OSError, ValueError) as e:
        print(json.dumps({"detail": str(e), "error": "InvalidParameter"}), file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
