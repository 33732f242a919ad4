"""
API models for the doxysearch HTTP interface.

Pydantic counterparts of the msgspec records in `doxysearch.models`, used for request
validation and response serialization by the server and the remote client.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from doxysearch.lookup import MatchField, MatchMode
from doxysearch.models import IndexEntry, SectionInfo, Variant


class VariantModel(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str = Field(..., description="Display name of the symbol", examples=["operator*"])
    href: str = Field(
        ...,
        description="Relative link into the generated documentation (<page>.html#<anchor>)",
        examples=["../class_s_g_point.html#a3c878d936b6e5255b1b1b8aedc61e86b"],
    )
    scope: str | None = Field(None, description="Owning class or namespace", examples=["SGPoint"])
    title: str | None = Field(
        None, description="Per-result text rendered by the search widget", examples=["SGPoint::operator*()"]
    )
    target_parent: bool = Field(True, description="Open the link in the parent frame")

    @classmethod
    def from_variant(cls, variant):
        # type: (Variant) -> VariantModel
        return cls(
            label=variant.label,
            href=variant.href,
            scope=variant.scope,
            title=variant.title,
            target_parent=variant.target_parent,
        )

    def to_variant(self):
        # type: () -> Variant
        return Variant(
            label=self.label,
            href=self.href,
            scope=self.scope,
            title=self.title,
            target_parent=self.target_parent,
        )


class EntryModel(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str = Field(..., min_length=1, description="Normalized search key", examples=["operator_2a"])
    label: str = Field(..., description="Display name shared by all variants", examples=["operator*"])
    variants: list[VariantModel] = Field(..., min_length=1, description="Occurrences in generation order")

    @classmethod
    def from_entry(cls, entry):
        # type: (IndexEntry) -> EntryModel
        return cls(
            key=entry.key,
            label=entry.label,
            variants=[VariantModel.from_variant(v) for v in entry.variants],
        )

    def to_entry(self):
        # type: () -> IndexEntry
        return IndexEntry(key=self.key, variants=tuple(v.to_variant() for v in self.variants))


class SectionModel(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int = Field(..., ge=0, description="Section id")
    name: str = Field(..., description="Section name used in file names", examples=["all"])
    label: str = Field(..., description="Human-readable section label", examples=["All"])
    chars: str = Field("", description="Leading characters that have a table file")

    @classmethod
    def from_section(cls, section):
        # type: (SectionInfo) -> SectionModel
        return cls(id=section.id, name=section.name, label=section.label, chars=section.chars)

    def to_section(self):
        # type: () -> SectionInfo
        return SectionInfo(id=self.id, name=self.name, label=self.label, chars=self.chars)


class SearchResult(BaseModel):
    section: str = Field(..., description="Section that was searched")
    query: str = Field(..., description="Query as received")
    mode: MatchMode = Field(MatchMode.substring, description="Match mode used")
    fields: MatchField = Field(MatchField.both, description="Entry fields compared")
    scope: str | None = Field(None, description="Scope filter applied")
    entries: list[EntryModel] = Field(default_factory=list, description="Matching entries in table order")
