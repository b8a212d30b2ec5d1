from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config import HookifyConfig, load_config
from .errors import HookifyError
from .generation import GenerationProfile
from .generation.flavors import available_flavors, load_entry_point_flavors
from .generator import PackageSpec, generate_package
from .ir import build_ir
from .loader import load_openapi


def main(argv: list[str] | None = None) -> int:
    load_entry_point_flavors()
    parser = argparse.ArgumentParser(prog="hookify", description="Generate TypeScript clients from an OpenAPI spec.")
    parser.add_argument("spec", help="Path or URL of the OpenAPI spec (JSON/YAML)")
    parser.add_argument("-o", "--output-dir", type=Path, required=True, help="Output directory")
    parser.add_argument("-n", "--package-name", default="api", help="Subdirectory of the output directory")
    parser.add_argument(
        "--flavor",
        action="append",
        choices=available_flavors(),
        help="Client flavor to generate; may be repeated (default: swr)",
    )
    parser.add_argument("--config", type=Path, help="Override config file (JSON/YAML)")
    parser.add_argument("--typescript-version", default="4.5", help="Target TypeScript version (e.g. 4.5)")
    parser.add_argument("--tsconfig", type=Path, help="tsconfig.json of the target project")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config) if args.config else HookifyConfig()
        profile = GenerationProfile.from_version(args.typescript_version)
        if args.tsconfig:
            profile = profile.with_tsconfig(args.tsconfig)
        document = load_openapi(args.spec)
        ir = build_ir(document)
        package = PackageSpec(package_name=args.package_name, output_dir=args.output_dir)
        result = generate_package(package, ir, profile, config, flavors=args.flavor or ["swr"])
    except HookifyError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    except (FileNotFoundError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    for path in result.paths:
        print(path)
    for failure in result.failures:
        print(f"error: {failure}", file=sys.stderr)
    return 0 if result.ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
