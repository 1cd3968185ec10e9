"""
Broadside CLI - Command-line interface for the engine.

Usage:
    broadside validate <placement_file>   Validate a ship placement JSON file
    broadside serve                       Run the HTTP API
"""

import argparse
import json
import sys


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Broadside - Naval combat rules engine",
        prog="broadside",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Validate command
    validate_parser = subparsers.add_parser("validate", help="Validate a ship placement")
    validate_parser.add_argument("placement_file", help="Path to placement JSON file")
    validate_parser.add_argument("--grid-size", type=int, help="Board dimension N")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind address")
    serve_parser.add_argument("--port", type=int, default=8000, help="Bind port")

    args = parser.parse_args(argv)

    if args.command == "validate":
        return cmd_validate(args)
    elif args.command == "serve":
        return cmd_serve(args)
    else:
        parser.print_help()
        return 1


def cmd_validate(args) -> int:
    """Validate a placement file and print every problem found."""
    from .board import validate_placement
    from .errors import PlacementError, SchemaError

    try:
        with open(args.placement_file, "r", encoding="utf-8") as f:
            payload = json.load(f)
    except FileNotFoundError:
        print(f"Error: File not found: {args.placement_file}")
        return 1
    except json.JSONDecodeError as e:
        print(f"Error: Invalid JSON in {args.placement_file}: {e}")
        return 1

    try:
        validate_placement(payload, grid_size=args.grid_size)
    except SchemaError as e:
        print(f"Invalid placement: {e}")
        for violation in e.violations:
            print(f"  - {violation.path}: {violation.message}")
        return 1
    except PlacementError as e:
        print(f"Invalid placement: {e}")
        return 1

    print("OK")
    return 0


def cmd_serve(args) -> int:
    """Run the API under uvicorn."""
    import uvicorn

    from .log import setup_logging

    setup_logging()
    uvicorn.run(
        "broadside.api.app:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        log_config=None,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
