"""
Command-line interface for pdfdeck.
"""

import argparse
import json
import os
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from pdfdeck import __version__
from pdfdeck.config import StyleProfile, default_profile, describe_profile, load_profile
from pdfdeck.errors import ConfigurationError
from pdfdeck.pipeline import DeckPipeline


def _load_profile(config_path: Optional[Path], tolerance: Optional[float]) -> StyleProfile:
    profile = load_profile(config_path) if config_path else default_profile()
    if tolerance is not None:
        profile = profile.merged({"conversion": {"line_tolerance": tolerance}})
    return profile


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pdfdeck",
        description="pdfdeck: Convert text-based PDFs into template-styled PPTX",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Convert with the built-in profile
  pdfdeck input.pdf

  # Use a YAML style profile and a looser line tolerance
  pdfdeck input.pdf --config profile.yml --tolerance 8

  # Re-render from saved pages JSON with another profile
  pdfdeck --from-pages output/deck/deck.pages.json --config other.yml

  # Show the effective profile
  pdfdeck --show-config --config profile.yml

Environment Variables:
  PDFDECK_CONFIG      Default style profile (YAML)
  OUTPUT_DIR          Default output directory
        """,
    )

    parser.add_argument(
        "input",
        nargs="?",
        type=Path,
        help="Input PDF file or pages JSON (with --from-pages)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"pdfdeck {__version__}",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        help="Style profile YAML (default: $PDFDECK_CONFIG or built-in)",
    )
    parser.add_argument(
        "--tolerance",
        type=float,
        help="Vertical distance within which fragments share a line",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        help="Output directory (default: ./output/<pdf_name>)",
    )
    parser.add_argument(
        "--no-intermediate",
        action="store_true",
        help="Don't save the intermediate pages JSON",
    )
    parser.add_argument(
        "--from-pages",
        action="store_true",
        help="Render from a saved pages JSON instead of a PDF",
    )
    parser.add_argument(
        "--show-config",
        action="store_true",
        help="Print a summary of the style profile and exit",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Show tracebacks on error",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    load_dotenv()

    parser = build_parser()
    args = parser.parse_args(argv)

    config_path = args.config
    if config_path is None and os.getenv("PDFDECK_CONFIG"):
        config_path = Path(os.environ["PDFDECK_CONFIG"])
    output_dir = args.output
    if output_dir is None and os.getenv("OUTPUT_DIR") and args.input:
        output_dir = Path(os.environ["OUTPUT_DIR"]) / args.input.stem

    try:
        profile = _load_profile(config_path, args.tolerance)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.show_config:
        print(json.dumps(describe_profile(profile), indent=2, ensure_ascii=False))
        return 0

    if not args.input:
        parser.print_help()
        return 1

    if not args.input.exists():
        print(f"Error: Input file not found: {args.input}", file=sys.stderr)
        return 1

    try:
        if args.from_pages:
            DeckPipeline.from_pages(
                pages_path=args.input,
                output_dir=output_dir,
                profile=profile,
            )
        else:
            pipeline = DeckPipeline(
                profile=profile,
                save_intermediate=not args.no_intermediate,
            )
            pipeline.process(pdf_path=args.input, output_dir=output_dir)

        return 0

    except KeyboardInterrupt:
        print("\n\nInterrupted by user", file=sys.stderr)
        return 130

    except Exception as e:
        print(f"\nError: {e}", file=sys.stderr)
        if args.debug:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
