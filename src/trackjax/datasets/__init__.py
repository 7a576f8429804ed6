"""Sensor measurement log datasets for trackjax.

Loads whitespace-separated lidar/radar logs with ground truth into Polars
DataFrames and converts them to :class:`~trackjax.tracking.Measurement`
records.

Typical usage::

    from trackjax.datasets import load_measurement_log, measurements_from_dataframe
    from trackjax.tracking import Estimator

    df = load_measurement_log("obj_pose-laser-radar-synthetic-input.txt")
    est = Estimator()
    for m in measurements_from_dataframe(df):
        est.process_measurement(m)
"""

from trackjax.datasets._log_parsers import (
    ground_truth_from_dataframe,
    load_measurement_log,
    measurements_from_dataframe,
    parse_log_line,
)

__all__ = [
    "ground_truth_from_dataframe",
    "load_measurement_log",
    "measurements_from_dataframe",
    "parse_log_line",
]
