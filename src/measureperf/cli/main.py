"""
Command-line interface for measureperf.

Measures a Python callable given as `package.module:function`, passing any
extra command-line arguments to it as strings, and prints the resulting
performance report.

    measureperf mypkg.bench:build_index --repeat 3
    measureperf mypkg.jobs:fetch_all --json
"""

import argparse
import asyncio
import importlib
import inspect
import json
import logging
import sys
import tomllib
from pathlib import Path
from typing import Any, Callable, List, Optional

from ..config import SCHEDULER_CHOICES, get_config, set_config_path
from ..measurement import MeasurePerformance
from ..models.report import PerformanceReport
from ..reporting import format_report_summary, reports_to_frame
from ..validation import (
    MeasurementError,
    ValidationError,
    handle_cli_error,
    validate_log_level,
    validate_positive_float,
)

LOG_FORMAT = "%(asctime)s [%(levelname)-5.5s] %(name)s:%(filename)s:%(lineno)d\t %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger(__name__)


def load_target(target: str) -> Callable[..., Any]:
    """
    Import the callable named by `package.module:function`.

    Nested attributes are allowed after the colon (`module:Class.method`).

    Raises:
        ValidationError: If the target is malformed or not callable
        ImportError: If the module cannot be imported
    """
    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        raise ValidationError(
            f"target must look like 'package.module:function', got '{target}'",
            field_name="target",
            value=target,
        )

    obj: Any = importlib.import_module(module_name)
    for attr in attr_path.split("."):
        try:
            obj = getattr(obj, attr)
        except AttributeError:
            raise ValidationError(
                f"'{module_name}' has no attribute '{attr_path}'",
                field_name="target",
                value=target,
            ) from None

    if not callable(obj):
        raise ValidationError(
            f"target '{target}' is not callable", field_name="target", value=target
        )
    return obj


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="measureperf",
        description="Measure elapsed time and resident memory of a Python callable.",
    )
    parser.add_argument("target", help="Callable to measure, as 'package.module:function'.")
    parser.add_argument("args", nargs="*", help="String arguments passed to the callable.")
    parser.add_argument("--config", type=Path, help="Path to a config.toml file.")
    parser.add_argument(
        "--sampling-period",
        type=str,
        help="Seconds between memory samples (overrides config).",
    )
    parser.add_argument(
        "--scheduler",
        choices=SCHEDULER_CHOICES,
        help="Periodic sampler to use (overrides config).",
    )
    parser.add_argument(
        "--repeat",
        type=int,
        default=1,
        help="Measure the callable this many times and print a comparison table.",
    )
    parser.add_argument("--json", action="store_true", help="Print reports as JSON.")
    parser.add_argument("--log-level", help="Logging level (overrides config).")
    return parser


def _measure_once(measure: MeasurePerformance, func: Callable[..., Any], args: List[str]) -> PerformanceReport:
    if inspect.iscoroutinefunction(func):
        return asyncio.run(measure.run(lambda: func(*args)))
    return measure.run_sync(lambda: func(*args))


def main_cli(argv: Optional[List[str]] = None) -> int:
    """
    Entry point for the `measureperf` command.

    Returns:
        Process exit code: 0 on success, 1 if the measured callable failed.
        Configuration and argument errors exit through handle_cli_error.
    """
    args = build_parser().parse_args(argv)

    if args.config is not None:
        set_config_path(args.config)

    try:
        config = get_config()
        log_level = (
            validate_log_level(args.log_level, field_name="--log-level")
            if args.log_level
            else config.log_level
        )
    except (FileNotFoundError, ValidationError, tomllib.TOMLDecodeError) as e:
        logging.basicConfig(level=logging.INFO, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT, stream=sys.stderr)
        handle_cli_error(error=e, context="configuration loading", exit_code=2, logger=logger)

    logging.basicConfig(level=log_level, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT, stream=sys.stderr)

    try:
        overrides = {}
        if args.sampling_period is not None:
            overrides["sampling_period"] = validate_positive_float(
                args.sampling_period,
                min_value=0.0,
                field_name="--sampling-period",
                exclusive_min=True,
            )
        if args.scheduler is not None:
            overrides["scheduler"] = args.scheduler
        if args.repeat < 1:
            raise ValidationError("--repeat must be >= 1", field_name="--repeat", value=args.repeat)
        func = load_target(args.target)
    except (ValidationError, ImportError) as e:
        handle_cli_error(error=e, context="argument validation", exit_code=2, logger=logger)

    measure = MeasurePerformance.from_config(config, **overrides)
    reports: List[PerformanceReport] = []
    try:
        for run_index in range(args.repeat):
            logger.info(f"Measuring {args.target} (run {run_index + 1}/{args.repeat})")
            reports.append(_measure_once(measure, func, args.args))
    except MeasurementError as e:
        logger.critical(f"Measurement of {args.target} failed: {e}", exc_info=True)
        return 1
    except Exception as e:
        logger.error(f"{args.target} raised {type(e).__name__}: {e}", exc_info=True)
        return 1
    finally:
        measure.dispose()

    if args.json:
        payload = [r.to_dict() for r in reports]
        print(json.dumps(payload[0] if len(payload) == 1 else payload, indent=2))
    elif len(reports) == 1:
        print(format_report_summary(reports[0]))
    else:
        print(reports_to_frame(reports))
    return 0


def main() -> None:
    sys.exit(main_cli())


if __name__ == "__main__":
    main()
