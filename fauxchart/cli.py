"""fauxchart command line: generate a cohort and write synthetic datasets as CSV."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

import numpy as np

from fauxchart.config import DEFAULT_CONFIG_FILE, GeneratorConfig, load_config
from fauxchart.datasets.factory import DataGeneratorFactory
from fauxchart.errors import ConfigError, FauxchartError
from fauxchart.people import PersonCollection

logger = logging.getLogger("fauxchart")

EXIT_OK = 0
EXIT_CONFIG = 1
EXIT_USAGE = 2
EXIT_GENERATION = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fauxchart",
        description="Generate synthetic clinical datasets",
    )
    parser.add_argument("output_directory", nargs="?", help="Directory to write CSV files to")
    parser.add_argument("-p", "--patients", type=int, dest="number_of_patients",
                        help="Number of people in the cohort (default 500)")
    parser.add_argument("-r", "--rows", type=int, dest="number_of_rows",
                        help="Rows per dataset (default 2000)")
    parser.add_argument("-s", "--seed", type=int, help="Random seed")
    parser.add_argument("-d", "--dataset", action="append", dest="datasets",
                        help="Only generate this dataset (repeatable)")
    parser.add_argument("-l", "--lookups", action="store_true", default=None,
                        help="Also write the code lookup tables")
    parser.add_argument("--reference-table", type=Path,
                        help="Reference CSV to use instead of the bundled one")
    parser.add_argument("--on-degenerate", choices=["raise", "skip"],
                        help="What to do when no code is eligible for an admission month")
    parser.add_argument("--config", type=Path,
                        help=f"YAML config file (default ./{DEFAULT_CONFIG_FILE} if present)")
    parser.add_argument("--list", action="store_true", help="List available datasets and exit")
    parser.add_argument("--log-level", type=str, default="INFO", help="Logging level")
    return parser


def resolve_config(args: argparse.Namespace) -> GeneratorConfig:
    """Config file values with command-line options applied on top."""
    if args.config is not None:
        config = load_config(args.config)
    elif Path(DEFAULT_CONFIG_FILE).exists():
        config = load_config(DEFAULT_CONFIG_FILE)
    else:
        config = GeneratorConfig()

    return config.merged({
        "number_of_patients": args.number_of_patients,
        "number_of_rows": args.number_of_rows,
        "seed": args.seed,
        "output_directory": args.output_directory,
        "datasets": args.datasets,
        "lookups": args.lookups,
        "reference_table": args.reference_table,
        "on_degenerate": args.on_degenerate,
    })


def run(config: GeneratorConfig) -> int:
    """Generate every configured dataset; returns an exit code."""
    factory = DataGeneratorFactory(
        reference_table=config.reference_table,
        on_degenerate=config.on_degenerate,
        reference_date=config.reference_date,
    )

    names = config.datasets or factory.available()
    unknown = [n for n in names if n not in factory.available()]
    if unknown:
        logger.error("Could not find dataset(s) %s. Available: %s",
                     unknown, ", ".join(factory.available()))
        return EXIT_USAGE

    # One independent stream for the cohort and one per dataset
    streams = np.random.SeedSequence(config.seed).spawn(len(names) + 1)
    output_dir = config.output_directory

    try:
        people = PersonCollection(config.reference_date).generate(
            config.number_of_patients, np.random.default_rng(streams[0])
        )
        if config.lookups:
            factory.write_lookups(output_dir)

        for name, stream in zip(names, streams[1:]):
            generator = factory.create(name, np.random.default_rng(stream))
            generator.generate_file(people, output_dir / f"{name}.csv", config.number_of_rows)
    except (FauxchartError, OSError) as e:
        logger.error("Generation failed: %s", e)
        return EXIT_GENERATION

    logger.info("Generated %d dataset(s) for %d people in %s",
                len(names), len(people), output_dir)
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))

    if args.list:
        print("\n".join(DataGeneratorFactory().available()))
        return EXIT_OK

    try:
        config = resolve_config(args)
    except (ConfigError, FileNotFoundError) as e:
        logger.error("%s", e)
        return EXIT_CONFIG

    return run(config)
