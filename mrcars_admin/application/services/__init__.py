"""Application services: fan-out aggregation, feed reconciliation, mutation gateway."""

from mrcars_admin.application.services.activity_reconciler import ActivityReconciler
from mrcars_admin.application.services.mutation_gateway import MutationGateway
from mrcars_admin.application.services.stats_aggregator import StatsAggregator

__all__ = [
    "ActivityReconciler",
    "MutationGateway",
    "StatsAggregator",
]
