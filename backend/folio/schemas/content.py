"""Content Schemas — books, chapters, articles, and categories with nested sections.

Invariants:
    - title() is "Title: Subtitle (TYPE)", "Title (TYPE)", or "TYPE id"
    - word/link/section counts are derived from the section tree, never trusted from input
    - tags are trimmed, lower-cased, de-duplicated

Design Decisions:
    - Section is recursive (sections within sections): a book holds chapters holds articles
    - Plain text only: markup is stripped for word counts, not rendered
"""

import re

from pydantic import BaseModel, Field, field_validator

from folio.core import tuid
from folio.core.domain_types import ContentType
from folio.schemas.common import VersionedBody

_TAG = re.compile(r"<[^>]+>")


class Author(BaseModel):
    name: str = ""
    email: str = ""
    url: str = ""


class Link(BaseModel):
    url: str = ""
    text: str = ""


class Section(BaseModel):
    """A titled block of text; may contain links and nested subsections."""
    id: str = ""
    title: str = ""
    subtitle: str = ""
    text: str = ""
    links: list[Link] = Field(default_factory=list)
    sections: list["Section"] = Field(default_factory=list)

    def is_empty(self) -> bool:
        return (
            not (self.title + self.subtitle + self.text).strip()
            and not self.links and not self.sections
        )

    def word_count(self) -> int:
        count = len(self.title.split()) + len(self.subtitle.split())
        count += len(_TAG.sub(" ", self.text).split())
        count += sum(len(link.text.split()) for link in self.links)
        return count + sum(s.word_count() for s in self.sections)

    def link_count(self) -> int:
        return len(self.links) + sum(s.link_count() for s in self.sections)

    def section_count(self) -> int:
        return 1 + sum(s.section_count() for s in self.sections)

    def problems(self) -> list[str]:
        found = []
        if self.id and not tuid.is_valid(self.id):
            found.append("Section ID is invalid")
        for link in self.links:
            if not link.url:
                found.append("Link URL is missing")
        for section in self.sections:
            found.extend(section.problems())
        if self.is_empty():
            found.append("Section is empty")
        return found


class Content(VersionedBody):
    type: ContentType
    editor_id: str = ""
    editor_name: str = ""
    comment: str = ""
    word_count: int = 0
    link_count: int = 0
    section_count: int = 0
    tags: list[str] = Field(default_factory=list)
    authors: list[Author] = Field(default_factory=list)
    content: Section = Field(default_factory=Section)

    @field_validator("tags")
    @classmethod
    def standardize_tags(cls, v: list[str]) -> list[str]:
        return list(dict.fromkeys(t.strip().lower() for t in v if t.strip()))

    def title(self) -> str:
        t = self.type.value
        if self.content.title and self.content.subtitle:
            return f"{self.content.title}: {self.content.subtitle} ({t})"
        if self.content.title:
            return f"{self.content.title} ({t})"
        return f"{t} {self.id}"

    def author_names(self) -> list[str]:
        return [a.name for a in self.authors if a.name]
