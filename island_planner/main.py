"""
Main entry point for the Island Planner application.

This module provides a CLI that loads the reference data, builds a trip
from the selected locations and prints (or saves) the day-by-day itinerary
together with its cost breakdown.
"""

import argparse
import json
import os
import sys
import traceback
from datetime import date

from island_planner.config import PlannerSettings, initialize_config
from island_planner.data.models import EssentialsConfig, FerryClass, TripSelection
from island_planner.data.repository import DataStatus, ReferenceDataRepository
from island_planner.planning.session import TripPlanner
from island_planner.services.catalog import selectable_locations
from island_planner.utils.helpers import format_price, safe_load_json
from island_planner.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


def setup_argparse() -> argparse.ArgumentParser:
    """
    Set up the argument parser for the CLI.

    Returns:
        Configured argument parser
    """
    parser = argparse.ArgumentParser(
        description="Plan an island-hopping itinerary and estimate its cost"
    )

    system_group = parser.add_argument_group("System Configuration")
    system_group.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Set the logging level",
    )
    system_group.add_argument(
        "--log-file",
        type=str,
        help="Path to write log file (optional)",
    )
    system_group.add_argument(
        "--config",
        type=str,
        help="Path to custom configuration file",
    )
    system_group.add_argument(
        "--data-dir",
        type=str,
        help="Directory holding locations.json, activities.json and "
        "location_adventures.json",
    )

    trip_group = parser.add_argument_group("Trip")
    trip_group.add_argument(
        "--select",
        type=str,
        nargs="*",
        default=[],
        help="Ids of the locations to visit",
    )
    trip_group.add_argument(
        "--no-hub-start",
        action="store_true",
        help="Do not force the trip to start on the hub island",
    )
    trip_group.add_argument("--adults", type=int, default=2, help="Adults")
    trip_group.add_argument("--infants", type=int, default=0, help="Infants")
    trip_group.add_argument(
        "--start-date",
        type=date.fromisoformat,
        help="First day of the trip (YYYY-MM-DD)",
    )

    cost_group = parser.add_argument_group("Costs")
    cost_group.add_argument(
        "--ferry-class",
        type=str,
        default=FerryClass.DELUXE.value,
        help="Ferry class (Economy, Deluxe, Luxury)",
    )
    cost_group.add_argument(
        "--cab-model",
        type=str,
        default="suv",
        help="Vehicle model id used on Day Cab days",
    )
    cost_group.add_argument(
        "--scooter-islands",
        type=str,
        nargs="*",
        default=[],
        help="Islands to get around by flat-rate scooter",
    )
    cost_group.add_argument(
        "--hotels",
        type=str,
        help='Hotel choice per island as JSON, e.g. \'{"Neil (Shaheed Dweep)": "nl_h1"}\'',
    )
    cost_group.add_argument(
        "--addons",
        type=str,
        nargs="*",
        default=[],
        help="Ids of add-on activities",
    )

    output_group = parser.add_argument_group("Output Options")
    output_group.add_argument(
        "--save-to",
        type=str,
        help="Save the plan to the specified file path",
    )
    output_group.add_argument(
        "--format",
        type=str,
        choices=["json", "text"],
        default="text",
        help="Output format",
    )

    return parser


def build_planner(args: argparse.Namespace, settings: PlannerSettings) -> TripPlanner:
    """Load the reference data and apply the trip choices from the CLI."""
    data_dir = args.data_dir or settings.system.data_dir
    repository = ReferenceDataRepository(data_dir, settings.loader, settings.tables)
    data = repository.load_all()
    if data.status == DataStatus.DEGRADED:
        logger.warning(
            f"Reference data degraded, failed sources: {', '.join(data.failed_sources)}"
        )

    hotels = safe_load_json(args.hotels or "", {})
    if not isinstance(hotels, dict):
        logger.warning("Ignoring --hotels, expected a JSON object")
        hotels = {}

    selectable_ids = {loc.id for loc in selectable_locations(data.locations)}
    skipped = [i for i in args.select if i not in selectable_ids]
    if skipped:
        logger.warning(
            f"Ignoring unknown or non-selectable locations: {', '.join(skipped)}"
        )

    return TripPlanner(
        locations=data.locations,
        activities=data.activities,
        mappings=data.mappings,
        tables=settings.tables,
        selection=TripSelection(
            location_ids=[i for i in args.select if i in selectable_ids],
            start_from_hub=not args.no_hub_start,
            party={"adults": args.adults, "infants": args.infants},
            start_date=args.start_date,
        ),
        essentials=EssentialsConfig(
            ferry_class=args.ferry_class,
            cab_model_id=args.cab_model,
            scooter_islands=set(args.scooter_islands),
        ),
        chosen_hotels={str(k): str(v) for k, v in hotels.items()},
        addon_ids=list(args.addons),
    )


def render_text(planner: TripPlanner, currency: str = "INR") -> str:
    """
    Render the itinerary and cost breakdown as plain text.

    Args:
        planner: Planning session to render
        currency: Currency code for prices

    Returns:
        Multi-line text
    """
    summary = planner.summary()
    lines = [f"=== Island Trip ({summary.day_count} days, {summary.pax} travellers) ==="]

    for i, (day, day_date) in enumerate(zip(planner.days, summary.dates, strict=True)):
        date_label = day_date.isoformat() if day_date else "No date set"
        lines.append("")
        lines.append(f"Day {i + 1} ({date_label}) - {day.island} [{day.transport}]")
        for item in day.items:
            if item.type == "location":
                lines.append(f"  - {item.name} ({item.duration_hrs:g}h)")
            elif item.type == "ferry" and item.time:
                lines.append(f"  - {item.name} ({item.time})")
            else:
                lines.append(f"  - {item.name}")
        if not day.items:
            lines.append("  (free day)")

    lines.append("")
    lines.append("Costs:")
    for label, amount in summary.costs.line_items():
        lines.append(f"  {label}: {format_price(amount, currency)}")
    lines.append(f"  Total (indicative): {format_price(summary.costs.total, currency)}")
    lines.append(f"  Ferry legs: {summary.ferry_legs}")

    suggestions = planner.suggested_activities()
    if suggestions:
        chosen = set(planner.addon_ids)
        lines.append("")
        lines.append("Suggested add-ons:")
        for activity in suggestions:
            mark = "x" if activity.id in chosen else " "
            price = format_price(activity.price, currency)
            lines.append(f"  [{mark}] {activity.name} ({activity.id}) - {price}")
    return "\n".join(lines)


def render_json(planner: TripPlanner) -> str:
    payload = {
        "days": [day.model_dump(mode="json") for day in planner.days],
        "summary": planner.summary().model_dump(mode="json"),
        "suggested_addons": [
            activity.model_dump(mode="json")
            for activity in planner.suggested_activities()
        ],
    }
    return json.dumps(payload, indent=2, ensure_ascii=False)


def save_plan(
    planner: TripPlanner, file_path: str, format_type: str, currency: str = "INR"
) -> None:
    """Write the rendered plan to a file, creating its directory if needed."""
    directory = os.path.dirname(file_path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    if format_type == "json":
        content = render_json(planner)
    else:
        content = render_text(planner, currency)
    with open(file_path, "w", encoding="utf-8") as f:
        f.write(content)
    logger.info(f"Plan saved to {file_path}")


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point function.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    try:
        args = setup_argparse().parse_args(argv)
        setup_logging(log_level=args.log_level or "INFO", log_file=args.log_file)

        settings = initialize_config(
            custom_config_path=args.config, validate=True, raise_on_error=True
        )
        if args.log_level is None:
            setup_logging(settings.system.log_level, log_file=args.log_file)

        planner = build_planner(args, settings)
        currency = settings.system.currency

        if args.save_to:
            save_plan(planner, args.save_to, args.format, currency)
        elif args.format == "json":
            print(render_json(planner))
        else:
            print(render_text(planner, currency))
        return 0

    except PlannerSettings.ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        print(f"\nConfiguration Error: {e}")
        return 1
    except FileNotFoundError as e:
        logger.error(f"File not found: {e}")
        print(f"\nError: {e}")
        return 1
    except KeyboardInterrupt:
        logger.info("Planning session interrupted by user")
        return 0
    except Exception as e:
        logger.error(f"Error in main function: {e!s}\n{traceback.format_exc()}")
        print(f"\nError: {e!s}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
