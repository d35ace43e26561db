"""
Console entry point for batch SDF to SMILES conversion.

Converts every SDF file in the input directory (``sdf/`` by default) into a
text file with one SMILES per line in the output directory (``out/`` by
default), after asking for confirmation.
"""

import argparse
import logging
import sys
import time
from typing import List, Optional

from .config import ConverterConfig, load_config
from .converter import BatchConverter
from .driver import DirectoryDriver, summary_table
from .exceptions import ConversionError
from .toolkits import TOOLKITS, get_toolkit, set_toolkit_logging

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """
    Configure diagnostic logging to stderr.

    Console status output uses print; logging carries per-record failures and
    timings, shown with --verbose.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stderr)]
    )
    set_toolkit_logging(verbose)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        argparse.Namespace: Parsed command-line arguments.
    """
    parser = argparse.ArgumentParser(
        description="Convert all SDF files in a directory to SMILES text files "
                    "(one SMILES per line, one output file per input file).",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    parser.add_argument(
        "--base-dir",
        default=None,
        help="Directory the input and output directories are resolved against "
             "(default: current directory)"
    )
    parser.add_argument(
        "--input-dir",
        help="Directory containing SDF files (overrides config, default 'sdf')"
    )
    parser.add_argument(
        "--output-dir",
        help="Directory for SMILES files (overrides config, default 'out')"
    )
    parser.add_argument(
        "--config",
        help="Path to configuration file (JSON format)"
    )
    parser.add_argument(
        "--toolkit",
        choices=sorted(TOOLKITS),
        help="Chemistry toolkit used to read and encode molecules (overrides config)"
    )
    parser.add_argument(
        "--no-canonical",
        action="store_true",
        help="Write non-canonical SMILES"
    )
    parser.add_argument(
        "--no-isomeric",
        action="store_true",
        help="Omit stereochemistry and isotopes from SMILES"
    )
    parser.add_argument(
        "-y", "--yes",
        action="store_true",
        help="Do not ask for confirmation before processing"
    )
    parser.add_argument(
        "--no-pause",
        action="store_true",
        help="Do not wait for Enter before exiting"
    )
    parser.add_argument(
        "--summary",
        action="store_true",
        help="Write summary.csv with one row per file to the output directory"
    )
    parser.add_argument(
        "--failures",
        action="store_true",
        help="Write <name>.failed.tsv listing the records that could not be converted"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose output"
    )

    return parser.parse_args(argv)


def setup_config(args: argparse.Namespace) -> ConverterConfig:
    """
    Load the configuration and apply command line overrides.

    Args:
        args: Parsed command line arguments

    Returns:
        ConverterConfig: Configuration object
    """
    config = load_config(args.config)
    if args.config:
        logger.info(f"Loaded configuration from {args.config}")

    if args.input_dir:
        config.input_dir = args.input_dir
    if args.output_dir:
        config.output_dir = args.output_dir
    if args.toolkit:
        config.toolkit = args.toolkit
    if args.no_canonical:
        config.canonical = False
    if args.no_isomeric:
        config.isomeric_smiles = False
    if args.yes:
        config.confirm = False
    if args.no_pause:
        config.pause_on_exit = False
    if args.summary:
        config.write_summary = True
    if args.failures:
        config.write_failures = True

    config.validate()

    if args.verbose:
        summary = config.get_summary()
        print("Configuration Summary:")
        print(f"  Layout: {summary['layout']['input_dir']} -> {summary['layout']['output_dir']} "
              f"({summary['layout']['pattern']})")
        print(f"  Toolkit: {summary['toolkit']}")
        print(f"  Canonical: {summary['smiles']['canonical']}, "
              f"isomeric: {summary['smiles']['isomeric']}")
        print(f"  Reports: {', '.join(summary['reports']) or 'none'}")

    return config


def confirm(prompt: str) -> bool:
    """Ask a yes/no question; only 'y' counts as yes."""
    try:
        response = input(f"{prompt} (y/n) ")
    except EOFError:
        return False
    return response.strip().lower() == "y"


def finish(message: str, config: ConverterConfig) -> None:
    """Print a closing message and wait for Enter if configured to."""
    if not config.pause_on_exit:
        if message:
            print(message)
        return
    try:
        input(f"{message} Press Enter to exit..." if message else "Press Enter to exit...")
    except EOFError:
        print()


def main(argv: Optional[List[str]] = None) -> int:
    """Main execution function."""
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        config = setup_config(args)
        converter = BatchConverter(get_toolkit(config.toolkit, **config.toolkit_options()))
    except (ValueError, FileNotFoundError, ConversionError) as e:
        print(f"Error: {e}")
        return 1

    input_dir, output_dir = config.resolve_paths(args.base_dir)

    if not input_dir.is_dir():
        print(f"Error: Directory '{input_dir}' does not exist.")
        finish("", config)
        return 1

    driver = DirectoryDriver(
        input_dir, output_dir,
        converter=converter,
        input_extension=config.input_extension,
        output_extension=config.output_extension,
        write_summary=config.write_summary,
        write_failures=config.write_failures
    )

    try:
        driver.ensure_output_dir()

        if config.confirm and not confirm(f"Process all SDF files in '{input_dir}'?"):
            finish("Operation cancelled.", config)
            return 0

        files = driver.find_input_files()
        if not files:
            finish(f"No SDF files found in '{input_dir}'.", config)
            return 0

        print(f"Found {len(files)} SDF file(s). Starting processing...")
        start_time = time.time()
        reports = driver.run(files)

    except ConversionError as e:
        print(f"Error: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        finish("", config)
        return 1

    if args.verbose:
        converted = sum(1 for report in reports if report.ok)
        print(f"\nConverted {converted}/{len(reports)} files "
              f"({time.time() - start_time:.2f}s)")
        print(summary_table(reports).to_string(index=False))

    finish("Processing completed.", config)
    return 0


if __name__ == "__main__":
    sys.exit(main())
