"""Content Service — versioned books, chapters, articles, and categories.

Indexes (all carry the content title as display text):
    - type: content type (BOOK, CHAPTER, ARTICLE, CATEGORY)
    - author: one partition per author name
    - editor: editor user ID
    - tag: one partition per tag

Listing filter precedence for content titles: type > author > editor > tag.
"""

from folio.core import tuid
from folio.core.domain_types import ContentType, EntityType
from folio.core.parameters import enum_value, lowercase, tuid_value
from folio.schemas.content import Content
from folio.services.entity_service import EntityService
from folio.services.listing import ListingBuilder, ListingSpec, ResultShape
from folio.store.table import IndexSpec, TableSpec

CONTENT_TABLE = TableSpec(
    entity_type=EntityType.CONTENT.value,
    model=Content,
    label=Content.title,
    indexes=(
        IndexSpec("type", keys=lambda c: [c.type.value], text_value=Content.title),
        IndexSpec("author", keys=Content.author_names, text_value=Content.title),
        IndexSpec("editor", keys=lambda c: [c.editor_id], text_value=Content.title),
        IndexSpec("tag", keys=lambda c: c.tags, text_value=Content.title),
    ),
)


class ContentService(EntityService[Content]):

    def define_listings(self) -> list[ListingSpec]:
        t = self.table
        return [
            ListingBuilder("contents", ResultShape.BODIES)
            .otherwise(t.entity_ids())
            .default_limit(20)
            .build(),
            ListingBuilder("content_titles", ResultShape.TEXT_VALUES)
            .filter("type", t.index_text_values("type"), enum_value(ContentType))
            .filter("author", t.index_text_values("author"))
            .filter("editor", t.index_text_values("editor"), tuid_value)
            .filter("tag", t.index_text_values("tag"), lowercase)
            .otherwise(t.entity_labels())
            .build(),
            ListingBuilder("content_types", ResultShape.VALUES)
            .otherwise(t.part_keys("type")).build(),
            ListingBuilder("content_authors", ResultShape.VALUES)
            .otherwise(t.part_keys("author")).build(),
            ListingBuilder("content_tags", ResultShape.VALUES)
            .otherwise(t.part_keys("tag")).build(),
        ]

    async def prepare(self, entity: Content) -> Content:
        return entity.model_copy(update={
            "word_count": entity.content.word_count(),
            "link_count": entity.content.link_count(),
            "section_count": entity.content.section_count(),
        })

    def problems(self, entity: Content) -> list[str]:
        found = []
        if entity.editor_id and not tuid.is_valid(entity.editor_id):
            found.append("editor_id is not a valid TUID")
        for author in entity.authors:
            if not author.name:
                found.append("author name is missing")
        if entity.content.is_empty():
            found.append("content is empty")
        else:
            found.extend(entity.content.problems())
        return found
