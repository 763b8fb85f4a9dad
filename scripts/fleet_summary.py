"""Print the fleet summary for a directory of trip logs.

Usage:
  uv run python scripts/fleet_summary.py \\
      --data-dir data/trips \\
      --trip "Urban Dense Delivery" \\
      --ticks 12

With ``--trip`` the named trip is selected and advanced by ``--ticks`` timer
ticks on a virtual clock before the summary and trip card are printed.
"""

from __future__ import annotations

import argparse
import logging
import sys

from fleet_replay.display.renderer import TripCardRenderer
from fleet_replay.playback.clock import SPEED_PRESETS
from fleet_replay.playback.scheduler import ManualScheduler
from fleet_replay.playback.selection import TripSelection
from fleet_replay.trips.loader import TripLoader


def main() -> None:
    ap = argparse.ArgumentParser(description="Summarise a fleet of recorded trips")
    ap.add_argument("--data-dir", default="data/trips", help="Directory of trip JSON files")
    ap.add_argument("--trip", default=None, help="Trip name to select")
    ap.add_argument("--ticks", type=int, default=0, help="Timer ticks to advance the selected trip")
    ap.add_argument(
        "--speed-ms",
        type=int,
        default=800,
        choices=sorted(SPEED_PRESETS),
        help="Playback speed preset",
    )
    ap.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = ap.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    trips = TripLoader().load_fleet(args.data_dir)
    if not trips:
        print(f"  [!] No trips found in {args.data_dir}", file=sys.stderr)
        sys.exit(1)

    scheduler = ManualScheduler()
    selection = TripSelection(trips, scheduler, speed_ms=args.speed_ms)

    if args.trip:
        try:
            selection.select(args.trip)
        except ValueError as exc:
            print(f"  [!] {exc}", file=sys.stderr)
            sys.exit(1)
        for _ in range(args.ticks):
            if not scheduler.fire_next():
                break

    snap = selection.snapshot()
    fleet = snap.fleet_summary
    print("Fleet Summary")
    print(f"  Total trips    : {fleet.total_trips}")
    print(f"  Moving         : {fleet.moving}")
    print(f"  Stopped        : {fleet.stopped}")
    print(f"  Completed      : {fleet.completed}")
    print(f"  Cancelled      : {fleet.cancelled}")
    print(f"  In Progress    : {fleet.in_progress}")
    print(f"  Fleet Progress : {fleet.fleet_progress_avg}%")

    if snap.trip_name:
        card = TripCardRenderer().render(snap)
        print()
        print(f"Trip: {card['trip_name']}")
        print(f"  Status    : {card['status']}")
        if not card["cancelled"]:
            print(f"  Position  : {card['lat']}, {card['lng']}")
            print(f"  Speed     : {card['speed']}")
            print(f"  Timestamp : {card['timestamp']}")
            print(f"  Progress  : {card['progress']}%  ({card['timeline']})")

    selection.close()


if __name__ == "__main__":
    main()
