"""Parsing utilities for sensor measurement logs.

A sensor log is a whitespace-separated text file with one measurement per
line. The first field is a sensor tag, followed by the raw reading, the
timestamp in microseconds and the ground-truth kinematic state::

    L  px   py            timestamp  gt_px gt_py gt_vx gt_vy [gt_yaw gt_yaw_rate]
    R  rho  phi  rho_dot  timestamp  gt_px gt_py gt_vx gt_vy [gt_yaw gt_yaw_rate]

Trailing ground-truth heading fields are accepted and ignored. Blank lines
and lines starting with ``#`` are skipped.

The log is loaded into a Polars DataFrame with one row per measurement and
the columns ``sensor``, ``z0``, ``z1``, ``z2`` (null for lidar),
``timestamp``, ``gt_px``, ``gt_py``, ``gt_vx`` and ``gt_vy``.
"""

from __future__ import annotations

import logging
from pathlib import Path

import jax.numpy as jnp
import polars as pl
from jax import Array

from trackjax.config import get_dtype
from trackjax.tracking import Measurement, SensorType

logger = logging.getLogger(__name__)

_GROUND_TRUTH_COLUMNS = ("gt_px", "gt_py", "gt_vx", "gt_vy")


def parse_log_line(line: str) -> dict:
    """Parse one sensor log line into a row dictionary.

    Args:
        line: A single non-empty log line.

    Returns:
        Dictionary with the keys of the log DataFrame columns.

    Raises:
        ValueError: If the sensor tag is unknown or the line has too few
            fields for its sensor.

    Examples:
        >>> row = parse_log_line("L 0.31 0.58 1477010443000000 0.6 0.6 5.2 0.0")
        >>> row["sensor"], row["timestamp"]
        ('lidar', 1477010443000000)
    """
    fields = line.split()
    sensor = SensorType.from_tag(fields[0])
    size = sensor.measurement_size

    expected = 1 + size + 1 + len(_GROUND_TRUTH_COLUMNS)
    if len(fields) < expected:
        raise ValueError(
            f"{sensor} log line needs at least {expected} fields, got {len(fields)}: {line!r}"
        )

    reading = [float(v) for v in fields[1 : 1 + size]]
    reading += [None] * (3 - size)
    timestamp = int(fields[1 + size])
    truth = [float(v) for v in fields[2 + size : expected]]

    row = {
        "sensor": sensor.value,
        "z0": reading[0],
        "z1": reading[1],
        "z2": reading[2],
        "timestamp": timestamp,
    }
    row.update(zip(_GROUND_TRUTH_COLUMNS, truth))
    return row


def load_measurement_log(filepath: str | Path) -> pl.DataFrame:
    """Load a sensor log file into a Polars DataFrame.

    Args:
        filepath: Path to the text log.

    Returns:
        Polars DataFrame with one row per measurement, in file order.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If a line cannot be parsed.
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"Measurement log not found: {filepath}")

    logger.info("Loading measurement log from %s", filepath)
    rows = []
    with open(filepath, encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            try:
                rows.append(parse_log_line(stripped))
            except ValueError as e:
                raise ValueError(f"{filepath}:{lineno}: {e}") from e

    df = pl.DataFrame(
        {
            "sensor": pl.Series([r["sensor"] for r in rows], dtype=pl.Utf8),
            "z0": pl.Series([r["z0"] for r in rows], dtype=pl.Float64),
            "z1": pl.Series([r["z1"] for r in rows], dtype=pl.Float64),
            "z2": pl.Series([r["z2"] for r in rows], dtype=pl.Float64),
            "timestamp": pl.Series([r["timestamp"] for r in rows], dtype=pl.Int64),
            **{
                col: pl.Series([r[col] for r in rows], dtype=pl.Float64)
                for col in _GROUND_TRUTH_COLUMNS
            },
        }
    )

    logger.info(
        "Loaded %d measurements (%d lidar, %d radar)",
        len(df),
        df.filter(pl.col("sensor") == SensorType.LIDAR.value).height,
        df.filter(pl.col("sensor") == SensorType.RADAR.value).height,
    )
    return df


def measurements_from_dataframe(df: pl.DataFrame) -> list[Measurement]:
    """Convert a measurement log DataFrame into :class:`Measurement` records.

    Args:
        df: DataFrame as returned by :func:`load_measurement_log`.

    Returns:
        List of measurements in row order.
    """
    dtype = get_dtype()
    measurements = []
    for row in df.iter_rows(named=True):
        sensor = SensorType(row["sensor"])
        reading = [row["z0"], row["z1"], row["z2"]][: sensor.measurement_size]
        measurements.append(
            Measurement(
                sensor=sensor,
                z=jnp.asarray(reading, dtype=dtype),
                timestamp=int(row["timestamp"]),
            )
        )
    return measurements


def ground_truth_from_dataframe(df: pl.DataFrame) -> Array:
    """Extract the ground-truth ``[px, py, vx, vy]`` rows of a log.

    Args:
        df: DataFrame as returned by :func:`load_measurement_log`.

    Returns:
        jax.Array: Ground truth of shape ``(len(df), 4)``.
    """
    dtype = get_dtype()
    return jnp.asarray(df.select(list(_GROUND_TRUTH_COLUMNS)).to_numpy(), dtype=dtype)
