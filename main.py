#!/usr/bin/env python3
"""
Main script for generating noisy linear datasets and estimating their parameters.
"""

# Pipeline overview:
# 1) Build dataset configurations (the four defaults, or one from the flags).
# 2) Draw additive noise per configuration from a discretized Gaussian density
#    table, using independent generators spawned from one seed.
# 3) Evaluate Y = aX + b + E on the integer x grid.
# 4) Fit a, b and sigma^2 by least squares with confidence intervals.
# 5) Print console tables, export CSVs and render figures.

import argparse
import logging
import os
import sys
import time

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
    handlers=[
        logging.StreamHandler(sys.stdout),
        logging.FileHandler("noisyline.log", mode="w"),
    ],
)

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from noisyline.config import DEFAULT_CONFIGURATIONS, DatasetConfiguration
from noisyline.errors import InvalidArgumentError
from noisyline.output import save_runs_to_csv
from noisyline.reporting import print_run_tables, print_summary
from noisyline.simulation import NOISE_POLICIES, create_results_dataframe, run_many
from noisyline.stats.noise import DEFAULT_NOISE_STEP
from noisyline.stats.regression import DEFAULT_CONFIDENCE_LEVEL


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Generate Y = aX + b + E datasets and estimate a, b, sigma^2."
    )
    parser.add_argument("--n", type=float, help="model coefficient N")
    parser.add_argument("--m", type=float, help="model coefficient M")
    parser.add_argument("--increment", type=int, help="step h between x values")
    parser.add_argument("--sample-count", type=int, help="number of observations")
    parser.add_argument("--noise-std", type=float, help="noise standard deviation")
    parser.add_argument("--min-x", type=int, default=-25)
    parser.add_argument("--max-x", type=int, default=25)
    parser.add_argument(
        "--confidence", type=float, default=DEFAULT_CONFIDENCE_LEVEL
    )
    parser.add_argument("--noise-step", type=float, default=DEFAULT_NOISE_STEP)
    parser.add_argument("--noise-policy", choices=NOISE_POLICIES, default="density")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--output-dir", default="output")
    parser.add_argument("--no-plots", action="store_true")
    return parser.parse_args(argv)


def build_configurations(args):
    custom = [args.n, args.m, args.increment, args.sample_count, args.noise_std]
    if all(v is None for v in custom):
        return list(DEFAULT_CONFIGURATIONS)
    if any(v is None for v in custom):
        raise InvalidArgumentError(
            "--n, --m, --increment, --sample-count and --noise-std must be given together"
        )
    return [
        DatasetConfiguration.from_coefficients(
            args.n,
            args.m,
            increment=args.increment,
            sample_count=args.sample_count,
            noise_std_dev=args.noise_std,
            min_x=args.min_x,
            max_x=args.max_x,
        )
    ]


def main(argv=None):
    """Main execution function."""

    start_time = time.time()
    args = parse_args(argv)
    logging.info("Initializing regression estimation pipeline")

    try:
        configs = build_configurations(args)
        logging.info("Configured %d datasets", len(configs))

        step_start = time.time()
        runs = run_many(
            configs,
            seed=args.seed,
            confidence_level=args.confidence,
            noise_policy=args.noise_policy,
            step=args.noise_step,
        )
    except InvalidArgumentError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1
    logging.info(
        "Dataset generation and estimation completed in %.2f seconds",
        time.time() - step_start,
    )

    print_run_tables(runs)
    results_df = create_results_dataframe(runs)
    print_summary(results_df)

    os.makedirs(args.output_dir, exist_ok=True)
    series_paths, summary_path = save_runs_to_csv(runs, args.output_dir)

    figure_paths = []
    if not args.no_plots:
        from noisyline.plotting import plot_runs

        figure_paths = plot_runs(runs, args.output_dir)

    logging.info("Total execution time: %.2f seconds", time.time() - start_time)
    logging.info("Generated output files:")
    for path in series_paths:
        logging.info("  - Series: %s", path)
    logging.info("  - Estimation summary: %s", summary_path)
    for path in figure_paths:
        logging.info("  - Figure: %s", path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
