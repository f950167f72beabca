#!/usr/bin/env python3
"""
DelayGuard — run one delay-risk analysis from the command line.

Validates the metrics, requests an analysis on an asyncio event loop, waits
for the simulated processing delay and prints the published estimate.

Usage:
    python scripts/run_analysis.py                          # Default order configuration
    python scripts/run_analysis.py --machine 40 --complexity 9 --seed 7
    python scripts/run_analysis.py --item "Smart Device" --delay-ms 0
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from delayguard.config import get_settings
from delayguard.engine import AnalysisController, AsyncioScheduler, make_rng
from delayguard.models import DEFAULT_STATS, InvalidSelectionError, validate_metrics
from delayguard.utils import configure_logging, get_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Estimate production delay risk for one order")
    parser.add_argument("--raw-material", type=float, default=85, help="Raw material availability %%")
    parser.add_argument("--machine", type=float, default=90, help="Machine availability %%")
    parser.add_argument("--shift", type=float, default=75, help="Shift capacity utilization %%")
    parser.add_argument("--workstation", type=float, default=80, help="Workstation efficiency %%")
    parser.add_argument("--complexity", type=float, default=5, help="Order complexity (1-10)")
    parser.add_argument("--supplier", type=float, default=85, help="Supplier reliability %%")
    parser.add_argument("--quantity", default="100", help="Units ordered")
    parser.add_argument("--item", default="Standard Widget", help="Production item")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the jitter generator")
    parser.add_argument("--delay-ms", type=int, default=None, help="Override simulated delay (ms)")
    return parser


async def run(args: argparse.Namespace) -> dict:
    settings = get_settings()
    metrics = validate_metrics(
        {
            "raw_material_availability": args.raw_material,
            "machine_availability": args.machine,
            "shift_capacity_utilization": args.shift,
            "workstation_efficiency": args.workstation,
            "order_complexity": args.complexity,
            "supplier_reliability": args.supplier,
            "quantity": args.quantity,
            "production_item": args.item,
        }
    )

    seed = args.seed if args.seed is not None else settings.rng_seed
    delay = args.delay_ms / 1000.0 if args.delay_ms is not None else None
    controller = AnalysisController(
        scheduler=AsyncioScheduler(),
        rng=make_rng(seed),
        delay_seconds=delay,
        settings=settings,
    )

    done: asyncio.Future = asyncio.get_running_loop().create_future()
    controller.on_analysis_complete(done.set_result)
    controller.request_analysis(metrics)
    notification = await done

    return {
        "production_item": metrics.production_item,
        "quantity": metrics.quantity,
        "readiness": {k: v.value for k, v in metrics.readiness_bands().items()},
        "delay_risk": notification.result.model_dump(mode="json"),
        "notification": {
            "title": notification.title,
            "description": notification.description,
            "urgent": notification.urgent,
        },
        "stats": DEFAULT_STATS.model_dump(),
    }


def main():
    configure_logging()
    args = build_parser().parse_args()

    try:
        report = asyncio.run(run(args))
    except InvalidSelectionError as e:
        logger.error("analysis_aborted", error=str(e))
        print(f"\n  {e}")
        sys.exit(2)

    print(json.dumps(report, indent=2))


if __name__ == "__main__":
    main()
