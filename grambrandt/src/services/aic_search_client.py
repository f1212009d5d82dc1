"""
Query builder and fetcher for the Art Institute of Chicago search endpoint.

One call to fetch_batch builds an Elasticsearch-style bool query from the
session's FilterConfig, POSTs it once (no retries), and turns the response
into display-ready ArtworkRecords. Every id returned is marked as seen, also
the ones we drop, so they are never requested again in this session.
"""

import logging
from typing import Any, Iterable, Optional

import requests
from pydantic import ValidationError

from grambrandt.src.constants.search import (
    BATCH_SIZE,
    DEFAULT_AIC_SEARCH_URL,
    DEFAULT_AIC_USER_AGENT,
    FIELDS,
    IIIF_IMAGE_WIDTH,
    MAX_HEIGHT_TO_WIDTH_RATIO,
    RANDOM_SORT,
)
from grambrandt.src.models import ArtworkRecord, FetchResult, FilterConfig
from grambrandt.src.utils.session_config import get_configured_session

logger = logging.getLogger(__name__)


def build_artwork_type_clause(artwork_type_ids: Iterable[int]) -> dict[str, Any]:
    """
    A single type is sent as a term match (one type per request, like the
    AIC examples). Several types are matched in one request with terms.
    """
    type_ids = sorted(artwork_type_ids)
    if len(type_ids) == 1:
        return {"term": {"artwork_type_id": type_ids[0]}}
    return {"terms": {"artwork_type_id": type_ids}}


def build_search_query(filter_config: FilterConfig) -> dict[str, Any]:
    """Build the bool query for the current filters and seen ids."""
    must: list[dict[str, Any]] = [
        {"term": {"has_not_been_viewed_much": filter_config.show_obscure}},
        {"exists": {"field": "artist_id"}},
        {"exists": {"field": "image_id"}},
        build_artwork_type_clause(filter_config.artwork_type_ids),
    ]
    must_not: list[dict[str, Any]] = [
        {"terms": {"id": filter_config.excluded_ids()}},
    ]

    if filter_config.require_short_description:
        must.append({"exists": {"field": "short_description"}})

    if filter_config.min_year is not None:
        must.append({"range": {"date_start": {"gte": filter_config.min_year}}})

    if filter_config.max_year is not None:
        must.append({"range": {"date_end": {"lte": filter_config.max_year}}})

    return {"bool": {"must": must, "must_not": must_not}}


def build_search_body(filter_config: FilterConfig) -> dict[str, Any]:
    return {
        "query": build_search_query(filter_config),
        "fields": FIELDS,
        "limit": BATCH_SIZE,
        "sort": RANDOM_SORT,
    }


def is_too_tall(item: dict[str, Any]) -> bool:
    """
    True if the first declared dimensions are more than 2.5 times taller than
    wide. Such images break the post layout and can make the IIIF server fail.
    """
    dimensions = item.get("dimensions_detail")
    if not dimensions:
        return False
    height = dimensions[0].get("height")
    width = dimensions[0].get("width")
    if not height or not width:
        return False
    return height > MAX_HEIGHT_TO_WIDTH_RATIO * width


def get_image_url(iiif_url: str, image_id: Optional[str]) -> Optional[str]:
    if not image_id:
        return None
    return f"{iiif_url}/{image_id}/full/{IIIF_IMAGE_WIDTH},/0/default.jpg"


def get_detail_url(website_url: str, artwork_id: int) -> str:
    return f"{website_url}/artworks/{artwork_id}"


def to_artwork_record(
    item: dict[str, Any], iiif_url: str, website_url: str
) -> ArtworkRecord:
    return ArtworkRecord(
        id=item["id"],
        title=item.get("title"),
        artist_name=item.get("artist_title"),
        artist_id=item.get("artist_id"),
        date_start=item.get("date_start"),
        date_end=item.get("date_end"),
        date_display=item.get("date_display"),
        medium=item.get("medium_display"),
        artwork_type=item.get("artwork_type_title"),
        place_of_origin=item.get("place_of_origin") or "",
        short_description=item.get("short_description") or "",
        image_url=get_image_url(iiif_url, item.get("image_id")),
        detail_url=get_detail_url(website_url, item["id"]),
    )


def normalize_artworks(
    items: list[dict[str, Any]], iiif_url: str, website_url: str
) -> list[ArtworkRecord]:
    """
    Turn raw AIC items into ArtworkRecords, dropping the ones that are too tall.
    Pure function of its input: does not touch any session state.
    """
    records = []
    for item in items:
        if is_too_tall(item):
            logger.debug(f"Excluding artwork {item.get('id')}: image too tall")
            continue
        records.append(to_artwork_record(item, iiif_url, website_url))
    return records


def parse_search_response(
    data: dict[str, Any],
) -> tuple[list[dict[str, Any]], str, str]:
    """
    Pull the items and base URLs out of a search response.

    Raises:
        KeyError, TypeError, ValueError: If the payload does not have the
            expected shape.
    """
    items = data["data"]
    if not isinstance(items, list):
        raise TypeError(f"Expected a list of artworks, got {type(items).__name__}")
    iiif_url = data["config"]["iiif_url"]
    website_url = data["config"]["website_url"]
    return items, iiif_url, website_url


class AICSearchClient:
    """Client for the AIC artworks search endpoint."""

    def __init__(
        self,
        http_session: Optional[requests.Session] = None,
        base_url: str = DEFAULT_AIC_SEARCH_URL,
        user_agent: str = DEFAULT_AIC_USER_AGENT,
        timeout: Optional[float] = None,
    ):
        self.http_session = http_session or get_configured_session(user_agent)
        self.base_url = base_url
        self.timeout = timeout

    def search(self, body: dict[str, Any]) -> dict[str, Any]:
        """
        POST a search body and return the decoded JSON.

        Raises:
            requests.RequestException: On transport errors and non-2xx statuses.
            ValueError: If the response is not JSON.
        """
        response = self.http_session.post(
            self.base_url, json=body, timeout=self.timeout
        )
        response.raise_for_status()
        return response.json()

    def fetch_batch(self, filter_config: FilterConfig) -> FetchResult:
        """
        Fetch one batch of artworks for the given filters.

        Never raises: transport errors, bad statuses and malformed payloads are
        logged and returned as a failed FetchResult, leaving seen_ids untouched.
        """
        if not filter_config.artwork_type_ids:
            logger.info("No artwork types selected, skipping AIC request")
            return FetchResult(records=[])

        body = build_search_body(filter_config)

        try:
            data = self.search(body)
            items, iiif_url, website_url = parse_search_response(data)
            returned_ids = [item["id"] for item in items]
            records = normalize_artworks(items, iiif_url, website_url)
        except requests.RequestException as e:
            logger.error(f"Error fetching artworks from AIC: {e}")
            return FetchResult(error=f"Request failed: {e}")
        except (
            KeyError,
            TypeError,
            AttributeError,
            ValueError,
            ValidationError,
        ) as e:
            logger.error(f"Malformed response from AIC search: {e!r}")
            return FetchResult(error=f"Malformed response: {e!r}")

        filter_config.mark_seen(returned_ids)

        logger.info(
            f"Fetched {len(items)} artworks from AIC, {len(records)} kept, "
            f"{len(filter_config.seen_ids)} seen in total"
        )
        return FetchResult(records=records)
