from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from dataclasses import fields, is_dataclass
from enum import Enum
from typing import TextIO

from .api import evaluate_source, parse_source, read_source
from .config import CliConfig
from .diagnostics import format_error
from .errors import CalcError
from .format import format_expr


logger = logging.getLogger("calcpy.cli")


def _to_jsonable(obj):
    if is_dataclass(obj):
        out = {"type": type(obj).__name__}
        out.update({f.name: _to_jsonable(getattr(obj, f.name)) for f in fields(obj)})
        return out
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (tuple, list)):
        return [_to_jsonable(x) for x in obj]
    return obj


def _run_one(src: str, args: argparse.Namespace, out: TextIO, err: TextIO) -> bool:
    try:
        if args.ast:
            print(json.dumps(_to_jsonable(parse_source(src)), sort_keys=True), file=out)
        elif args.format:
            print(format_expr(parse_source(src)), file=out)
        else:
            print(evaluate_source(src), file=out)
    except CalcError as e:
        logger.debug("failed on %r: %r", src, e)
        print(format_error(e, src), file=err)
        return False
    return True


def repl(args: argparse.Namespace, config: CliConfig, inp: TextIO, out: TextIO, err: TextIO) -> int:
    """Evaluate one line at a time until EOF; errors do not stop the loop."""
    while True:
        out.write(config.prompt)
        out.flush()
        line = inp.readline()
        if not line:
            break
        line = line.rstrip("\n")
        if not line.strip():
            continue
        _run_one(line, args, out, err)
    return 0


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="calcpy", description="Evaluate integer arithmetic expressions")
    ap.add_argument("expressions", nargs="*", help="Expressions to evaluate; reads lines from stdin if none")
    ap.add_argument("-f", "--file", help="Evaluate the expression stored in a file")
    mode = ap.add_mutually_exclusive_group()
    mode.add_argument("--ast", action="store_true", help="Print the parsed AST as JSON")
    mode.add_argument("--format", action="store_true", help="Print the canonical formatting")
    ap.add_argument("--prompt", default=None, help="Read-loop prompt (env: CALCPY_PROMPT)")
    ap.add_argument("--log-level", default=None, help="Logging level (env: CALCPY_LOG_LEVEL)")
    args = ap.parse_args(argv)

    try:
        config = CliConfig.from_env(os.environ).with_overrides(prompt=args.prompt, log_level=args.log_level)
    except ValueError as e:
        ap.error(str(e))
    logging.basicConfig(level=config.log_level, format="%(levelname)s %(name)s: %(message)s")

    sources = list(args.expressions)
    if args.file:
        sources.append(read_source(args.file))
    if not sources:
        return repl(args, config, sys.stdin, sys.stdout, sys.stderr)

    ok = True
    for src in sources:
        ok = _run_one(src, args, sys.stdout, sys.stderr) and ok
    return 0 if ok else 1
