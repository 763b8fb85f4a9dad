"""Fleet-wide status aggregation."""

from fleet_replay.fleet.aggregator import FleetAggregator, progress_percent, round_half_up
from fleet_replay.fleet.models import FleetSummary

__all__ = ["FleetAggregator", "FleetSummary", "progress_percent", "round_half_up"]
