"""
Samples a motion profile defined in a TOML file and writes the setpoints
(time, position, velocity) as CSV.

Usage: python -m pymotionprofile profile.toml [--period 0.01] [--csv out.csv]
"""
from __future__ import annotations
import argparse
import csv
import math
import sys
from typing import TextIO

from pymotionprofile.config import load_profile_config
from pymotionprofile.core.exceptions import ProfileError
from pymotionprofile.motion_profiles import MotionProfile
from pymotionprofile.utils.log_utils import init_logger


def sample_times(total_time: float, period: float) -> list[float]:
    """Time moments from 0 up to and including `total_time`, `period`
    seconds apart.
    """
    n = math.floor(total_time / period + 1e-9)
    times = [i * period for i in range(n + 1)]
    if total_time - times[-1] > 1e-9:
        times.append(total_time)
    return times


def write_setpoints(profile: MotionProfile, period: float, stream: TextIO) -> int:
    """Writes the sampled setpoints of `profile` to `stream` as CSV rows.
    Returns the number of setpoints written.
    """
    writer = csv.writer(stream)
    writer.writerow(["time", "position", "velocity"])
    times = sample_times(profile.total_time(), period)
    for t in times:
        state = profile.sample(t)
        writer.writerow([f"{t:.6f}", f"{state.position:.6f}", f"{state.velocity:.6f}"])
    return len(times)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="pymotionprofile",
        description="Sample a trapezoidal motion profile defined in a TOML file."
    )
    parser.add_argument(
        "config",
        help="Path to the profile configuration file"
    )
    parser.add_argument(
        "--period",
        type=float,
        default=None,
        help="Sampling period in seconds (default: [sampling] period of the file)"
    )
    parser.add_argument(
        "--csv",
        dest="csv_filepath",
        default=None,
        help="Path of the CSV output file (default: standard output)"
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)"
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also log to this file"
    )
    args = parser.parse_args(argv)

    logger = init_logger(
        "pymotionprofile",
        log_file=args.log_file,
        level=args.log_level
    )

    try:
        config = load_profile_config(args.config)
        profile = config.build_profile()
    except (OSError, ProfileError) as err:
        logger.error("Cannot create the motion profile: %s", err)
        return 2

    period = args.period if args.period is not None else config.period
    if not math.isfinite(period) or period <= 0.0:
        logger.error("Sampling period must be a positive number, got %s.", period)
        return 2

    logger.info(
        "%s from %s to %s: %d phase(s), total time %.6f s.",
        type(profile).__name__, profile.initial_state, profile.target_state,
        len(profile.phases), profile.total_time()
    )
    for phase in profile.phases:
        logger.debug("%s", phase)

    if args.csv_filepath is None:
        count = write_setpoints(profile, period, sys.stdout)
    else:
        try:
            with open(args.csv_filepath, "w", newline="", encoding="utf-8") as f:
                count = write_setpoints(profile, period, f)
        except OSError as err:
            logger.error("Cannot write the setpoints: %s", err)
            return 2
    logger.info("Wrote %d setpoints.", count)
    return 0


if __name__ == "__main__":
    sys.exit(main())
