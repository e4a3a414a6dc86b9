"""Write generated series and estimation summaries to CSV files.

This module is the output boundary between in-memory runs and tabular
artifacts. Files are plain CSV with a header row.
"""

from __future__ import annotations

import logging
import os
from typing import List, Sequence, Tuple

from .simulation import DatasetRun, create_results_dataframe

logger = logging.getLogger(__name__)


def save_runs_to_csv(
    runs: Sequence[DatasetRun], output_dir: str = "output"
) -> Tuple[List[str], str]:
    """Save every run's series and a one-row-per-run summary.

    Args:
        runs: Finished runs, in report order.
        output_dir: Directory that receives the CSV files.

    Returns:
        tuple[list[str], str]: Paths of ``series_<k>.csv`` files and of
        ``estimation_summary.csv``.

    Raises:
        ValueError: If ``runs`` is empty.
    """
    if not runs:
        raise ValueError("No runs to save.")

    os.makedirs(output_dir, exist_ok=True)

    series_paths = []
    for k, run in enumerate(runs):
        path = os.path.join(output_dir, f"series_{k}.csv")
        run.series.to_frame().to_csv(path, index=False)
        series_paths.append(path)
        logger.debug("Saved series for run %d to %s", k, path)

    summary_path = os.path.join(output_dir, "estimation_summary.csv")
    create_results_dataframe(runs).to_csv(summary_path, index=False)

    logger.info("Saved %d series files to %s", len(series_paths), output_dir)
    logger.info("Saved estimation summary to %s", summary_path)
    return series_paths, summary_path
