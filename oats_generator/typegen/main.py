"""
Import command - generates TypeScript types from an OpenAPI specification.

Usage:
    python -m oats_generator import --file petstore.yaml --output petstore.ts
    python -m oats_generator import --github OAI:OpenAPI-Specification:main:examples/v3.0/petstore.yaml
    python -m oats_generator import --config oats-generator.config.py [target ...]

Without --output the result is written to stdout.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from oats_generator.shared.errors import ConfigError, OpenApiError
from oats_generator.shared.spec_loader import SourceCache

from .assembler import import_open_api
from .config import TargetConfig, load_config, load_transformer
from .formatter import format_typescript


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="oats-generator import",
        description="Generate TypeScript types from an OpenAPI specification",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--file", type=Path, help="Path to the OpenAPI specification (JSON or YAML)")
    source.add_argument("--url", help="URL of the OpenAPI specification")
    source.add_argument("--github", help="GitHub locator of the specification (owner:repo:branch:path)")
    source.add_argument("--config", type=Path, help="Python config file defining CONFIG targets")
    parser.add_argument("--output", "-o", type=Path, help="Output path for the generated TypeScript file")
    parser.add_argument("--transformer", type=Path, help="Python file with a transform(spec) function")
    parser.add_argument("--validation", action="store_true", help="Validate the OpenAPI document before generating")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("targets", nargs="*", help="Config targets to generate (default: all)")
    return parser


def read_source(target: TargetConfig, cache: SourceCache) -> tuple[str, str]:
    """Read the source text and format of a target."""
    if target.file is not None:
        return cache.read_file(target.file)
    if target.url:
        return cache.fetch_url(target.url)
    return cache.fetch_github(target.github or "")


def generate_target(target: TargetConfig, cache: SourceCache) -> str:
    """Run the generator for one target and return the formatted output."""
    data, fmt = read_source(target, cache)
    return import_open_api(
        data,
        fmt,
        transformer=target.transformer,
        validation=target.validation,
        custom_import=target.custom_import,
        custom_generator=target.custom_generator,
        custom_generator_wrap=target.custom_generator_wrap,
        custom_operation_name_generator=target.custom_operation_name_generator,
        formatter=lambda text: format_typescript(text, target.output),
    )


def write_output(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def _select_targets(config: dict[str, TargetConfig], names: list[str]) -> list[TargetConfig]:
    if not names:
        return list(config.values())
    unknown = [name for name in names if name not in config]
    if unknown:
        raise ConfigError(
            f"Unknown target(s) {', '.join(unknown)} (available: {', '.join(config)})"
        )
    return [config[name] for name in names]


def _run(args: argparse.Namespace, parser: argparse.ArgumentParser) -> int:
    cache = SourceCache()

    if args.config is not None:
        for target in _select_targets(load_config(args.config), args.targets):
            print(f"Generating {target.name}...")
            write_output(target.output, generate_target(target, cache))
            print(f"Generated {target.name} -> {target.output}")
        return 0

    if args.targets:
        parser.error("targets can only be given with --config")
    if args.file is None and not args.url and not args.github:
        parser.error("one of --file, --url, --github or --config is required")

    target = TargetConfig(
        name="cli",
        output=args.output or Path("generated.ts"),
        file=args.file,
        url=args.url,
        github=args.github,
        transformer=load_transformer(args.transformer) if args.transformer else None,
        validation=args.validation,
    )
    output = generate_target(target, cache)

    if args.output is None:
        sys.stdout.write(output)
    else:
        write_output(args.output, output)
        print(f"Generated types -> {args.output}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        return _run(args, parser)
    except OpenApiError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
