from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List

from xmlview.core.casts import CASTS
from xmlview.core.errors import XMLViewError
from xmlview.core.operations import apply_field_operations, parse_field_operations
from xmlview.core.parser import import_xml
from xmlview.core.transformers import OPTIMIZE_MODES, TRANSFORMERS


def cmd_convert(args: argparse.Namespace) -> int:
    """Parse an XML file, apply casts then transforms, print JSON."""

    try:
        ops = parse_field_operations("cast", args.cast or [])
        ops += parse_field_operations("transform", args.transform or [])
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    try:
        collection = import_xml(args.path)
        apply_field_operations(collection, ops)
        if args.optimize:
            collection.optimize(args.optimize)
        out = collection.to_json(
            indent=args.indent,
            sort_keys=bool(args.sort_keys),
            ensure_ascii=False,
        )
    except (XMLViewError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    print(out)
    return 0


def cmd_list_policies(args: argparse.Namespace) -> int:
    casts = CASTS.names()
    transformers = TRANSFORMERS.names()
    if args.json:
        print(json.dumps({"casts": casts, "transformers": transformers}, indent=2))
        return 0

    print("Casts:")
    for name in casts:
        print(f"  {name}")
    print("Transformers:")
    for name in transformers:
        print(f"  {name}")
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Run the xmlview API server.

    Binds to 127.0.0.1 by default.
    """

    try:
        import uvicorn
    except ImportError as e:
        print(f"error: uvicorn is required to serve the API: {e}", file=sys.stderr)
        return 2

    from xmlview.api.server import create_app

    app = create_app()
    uvicorn.run(app, host=args.host, port=int(args.port), log_level=args.server_log_level)
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="xmlview", description="Typed access to XML documents")
    p.add_argument(
        "--log-level",
        default=None,
        help="Configure stdlib logging at this level (e.g. DEBUG)",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    cv = sub.add_parser("convert", help="Convert an XML file to JSON")
    cv.add_argument("path", help="Path to XML file")
    cv.add_argument(
        "--cast",
        action="append",
        metavar="KEY=POLICY",
        help="Cast a top-level key (repeatable), e.g. --cast note=list",
    )
    cv.add_argument(
        "--transform",
        action="append",
        metavar="KEY=POLICY",
        help="Transform a top-level key (repeatable), e.g. --transform title=upper",
    )
    cv.add_argument("--optimize", choices=OPTIMIZE_MODES, default=None, help="Rename keys")
    cv.add_argument("--indent", type=int, default=None, help="JSON indent")
    cv.add_argument("--sort-keys", action="store_true", help="Sort JSON object keys")
    cv.set_defaults(func=cmd_convert)

    lp = sub.add_parser("list-policies", help="List registered casts and transformers")
    lp.add_argument("--json", action="store_true", help="Print JSON")
    lp.set_defaults(func=cmd_list_policies)

    # --- API server ---
    sv = sub.add_parser("serve", help="Run the xmlview FastAPI server")
    sv.add_argument("--host", default="127.0.0.1", help="Bind host (default: 127.0.0.1)")
    sv.add_argument("--port", type=int, default=8080, help="Bind port (default: 8080)")
    sv.add_argument("--log-level", dest="server_log_level", default="info", help="Uvicorn log level")
    sv.set_defaults(func=cmd_serve)

    return p


def main(argv: List[str] | None = None) -> int:
    """CLI entry."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.log_level:
        logging.basicConfig(level=args.log_level.upper())
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
