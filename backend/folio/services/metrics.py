"""Metric Service — numeric measurements plus aggregate statistics.

Indexes (display text: metric description):
    - entity: entity ID the metric measures
    - type: entity type the metric measures
    - tag: one partition per tag

Statistics select their partition with the same precedence as the metrics
listing (entity > type > tag), then keep metrics created in [from, to).
"""

from datetime import timedelta

from folio.core import tuid
from folio.core.domain_types import EntityType
from folio.core.errors import NotFoundError, ValidationError
from folio.core.parameters import lowercase, parse_date, tuid_value
from folio.core.statistics import calculate_stats
from folio.schemas.metric import Metric, MetricStatsResponse
from folio.services.entity_service import EntityService
from folio.services.listing import ListingBuilder, ListingEngine, ListingSpec, ResultShape
from folio.services.query_dispatch import select_filter
from folio.store.table import IndexSpec, TableSpec
from folio.store.versioned_table import VersionedTable

METRIC_TABLE = TableSpec(
    entity_type=EntityType.METRIC.value,
    model=Metric,
    label=Metric.description,
    versioned=False,
    expires_at=lambda m: m.expires_at,
    indexes=(
        IndexSpec("entity", keys=lambda m: [m.entity_id], text_value=Metric.description),
        IndexSpec("type", keys=lambda m: [m.entity_type], text_value=Metric.description),
        IndexSpec("tag", keys=lambda m: m.tags, text_value=Metric.description),
    ),
)


class MetricService(EntityService[Metric]):

    def __init__(
        self, table: VersionedTable[Metric], engine: ListingEngine, retention_days: int = 365,
    ):
        self.retention = timedelta(days=retention_days)
        super().__init__(table, engine)

    def define_listings(self) -> list[ListingSpec]:
        t = self.table
        return [
            ListingBuilder("metrics", ResultShape.BODIES)
            .filter("entity", t.index_bodies("entity"), tuid_value)
            .filter("type", t.index_bodies("type"))
            .filter("tag", t.index_bodies("tag"), lowercase)
            .otherwise(t.entity_ids())
            .build(),
            ListingBuilder("metric_labels", ResultShape.TEXT_VALUES)
            .otherwise(t.entity_labels()).build(),
            ListingBuilder("metric_entity_ids", ResultShape.VALUES)
            .otherwise(t.part_keys("entity")).build(),
            ListingBuilder("metric_entity_types", ResultShape.VALUES)
            .otherwise(t.part_keys("type")).build(),
            ListingBuilder("metric_tags", ResultShape.VALUES)
            .otherwise(t.part_keys("tag")).build(),
        ]

    async def prepare(self, entity: Metric) -> Metric:
        if entity.expires_at is None:
            return entity.model_copy(update={"expires_at": entity.created_at + self.retention})
        return entity

    def problems(self, entity: Metric) -> list[str]:
        found = []
        if not entity.title.strip():
            found.append("title is missing")
        if not entity.entity_id and not entity.entity_type:
            found.append("entity_id or entity_type is required")
        if entity.entity_id and not tuid.is_valid(entity.entity_id):
            found.append("entity_id is not a valid TUID")
        if not entity.units.strip():
            found.append("units are missing")
        return found

    async def stats(
        self,
        entity: str | None = None,
        entity_type: str | None = None,
        tag: str | None = None,
        from_date: str | None = None,
        to_date: str | None = None,
    ) -> MetricStatsResponse:
        selection = select_filter(
            self.listings["metrics"].filters,
            {"entity": entity, "type": entity_type, "tag": tag},
            default=None,
        )
        start = parse_date("from", from_date) if from_date else None
        end = parse_date("to", to_date) if to_date else None
        if selection.accessor is None:
            raise ValidationError("one of entity, type, or tag is required", "entity")

        low, high = tuid.date_range_ids(start, end)
        metrics = [
            m for m in await selection.accessor.all()
            if (low is None or m.id >= low) and (high is None or m.id < high)
        ]
        if not metrics:
            raise NotFoundError("MetricStat", selection.filter_value)

        stats = calculate_stats(metrics)
        return MetricStatsResponse(
            entity_id=selection.filter_value if selection.filter_name == "entity" else "",
            entity_type=selection.filter_value if selection.filter_name == "type" else "",
            tag=selection.filter_value if selection.filter_name == "tag" else "",
            count=stats.count, sum=stats.sum, min=stats.min, max=stats.max,
            mean=stats.mean, median=stats.median, std_dev=stats.std_dev,
            from_time=stats.from_time, to_time=stats.to_time,
        )
