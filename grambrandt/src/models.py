from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field

from grambrandt.src.constants.search import DEFAULT_ARTWORK_TYPE_IDS


FILTER_FIELDS = (
    "artwork_type_ids",
    "show_obscure",
    "require_short_description",
    "min_year",
    "max_year",
)


@dataclass
class FilterConfig:
    """
    Filter settings and seen ids for one feed session.

    seen_ids is append-only (without duplicates) until reset_seen() is called,
    which only happens when the filters change.
    """

    artwork_type_ids: set[int] = field(
        default_factory=lambda: set(DEFAULT_ARTWORK_TYPE_IDS)
    )
    show_obscure: bool = False
    require_short_description: bool = True
    min_year: Optional[int] = None
    max_year: Optional[int] = None
    seen_ids: list[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.artwork_type_ids = set(self.artwork_type_ids)
        self._seen_lookup = set(self.seen_ids)
        if len(self._seen_lookup) != len(self.seen_ids):
            raise ValueError("seen_ids must not contain duplicates")

    def mark_seen(self, artwork_ids: Iterable[int]) -> int:
        """Append unseen ids in order. Returns the number of ids added."""
        added = 0
        for artwork_id in artwork_ids:
            if artwork_id in self._seen_lookup:
                continue
            self._seen_lookup.add(artwork_id)
            self.seen_ids.append(artwork_id)
            added += 1
        return added

    def reset_seen(self) -> None:
        self.seen_ids.clear()
        self._seen_lookup.clear()

    def is_seen(self, artwork_id: int) -> bool:
        return artwork_id in self._seen_lookup

    def snapshot(self) -> "FilterConfig":
        """Independent copy, so a fetch can run without touching this config."""
        return FilterConfig(
            artwork_type_ids=set(self.artwork_type_ids),
            show_obscure=self.show_obscure,
            require_short_description=self.require_short_description,
            min_year=self.min_year,
            max_year=self.max_year,
            seen_ids=list(self.seen_ids),
        )

    def excluded_ids(self) -> list[int]:
        """Snapshot of seen_ids for a request body."""
        return list(self.seen_ids)

    def filters(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in FILTER_FIELDS}

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.filters(),
            "artwork_type_ids": sorted(self.artwork_type_ids),
            "seen_count": len(self.seen_ids),
        }


class ArtworkRecord(BaseModel):
    """
    An artwork ready for display as a post.
    Built once per fetch from the raw AIC item and the response's base URLs.
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="AIC artwork id")
    title: Optional[str] = Field(default=None, description="Artwork title")
    artist_name: Optional[str] = Field(default=None, description="AIC artist_title")
    artist_id: Optional[int] = Field(default=None, description="AIC artist id")
    date_start: Optional[int] = Field(default=None, description="Start year")
    date_end: Optional[int] = Field(default=None, description="End year")
    date_display: Optional[str] = Field(
        default=None, description="Human readable date, e.g. 'c. 1650'"
    )
    medium: Optional[str] = Field(default=None, description="AIC medium_display")
    artwork_type: Optional[str] = Field(
        default=None, description="AIC artwork_type_title"
    )
    place_of_origin: str = Field(default="", description="Never None")
    short_description: str = Field(default="", description="Never None")
    image_url: Optional[str] = Field(
        default=None, description="IIIF image URL, None when the item has no image"
    )
    detail_url: str = Field(..., description="Artwork page on the AIC website")

    def to_dict(self) -> dict:
        return self.model_dump()


@dataclass(frozen=True)
class FetchResult:
    """Outcome of one fetch: the records, or the reason the fetch failed."""

    records: list[ArtworkRecord] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None
