#!/usr/bin/env python3
"""
oats-generator CLI.

Usage:
    python -m oats_generator <command> [options]
    oats-generator <command> [options]

Commands:
    import      Generate TypeScript types from an OpenAPI specification

Examples:
    python -m oats_generator import --file petstore.yaml --output petstore.ts
    python -m oats_generator import --url https://example.com/openapi.json
    python -m oats_generator import --config oats-generator.config.py petstore
"""

from __future__ import annotations

import sys

from oats_generator import __version__


def cmd_import(args: list[str]) -> int:
    """Generate TypeScript types from an OpenAPI specification."""
    from oats_generator.typegen import main as typegen_main
    try:
        return typegen_main.main(args)
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 1


COMMANDS = {
    "import": (cmd_import, "Generate TypeScript types from an OpenAPI specification"),
}


def main() -> int:
    if len(sys.argv) < 2 or sys.argv[1] in ("-h", "--help"):
        print(__doc__)
        print("Available commands:")
        for name, (_, desc) in COMMANDS.items():
            print(f"  {name:12} {desc}")
        print("\nUse '<command> --help' for command-specific options.")
        return 0

    if sys.argv[1] in ("-V", "--version"):
        print(__version__)
        return 0

    command = sys.argv[1]
    args = sys.argv[2:]

    if command not in COMMANDS:
        print(f"Unknown command: {command}")
        print(f"Available commands: {', '.join(COMMANDS.keys())}")
        return 1

    handler, _ = COMMANDS[command]
    return handler(args)


if __name__ == "__main__":
    sys.exit(main())
