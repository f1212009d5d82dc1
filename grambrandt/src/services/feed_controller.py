"""
Feed controller: keeps one browser session's feed going.

Owns the session's FilterConfig, runs the initial load and every infinite
scroll batch through the AIC search client, shuffles each batch, and keeps the
list of records currently on screen. Changing a filter resets the feed as if
the page had just been opened.
"""

import logging
import random
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from grambrandt.src.models import FILTER_FIELDS, ArtworkRecord, FilterConfig
from grambrandt.src.services.aic_search_client import AICSearchClient
from grambrandt.src.services.pagination_signal import PaginationSignal
from grambrandt.src.utils.shuffle import shuffle_records

logger = logging.getLogger(__name__)

# Only the most recent posts are kept per session
MAX_DISPLAYED_RECORDS = 240


class FeedState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"


@dataclass(frozen=True)
class FeedUpdate:
    """What the page should add after one batch."""

    records: list[ArtworkRecord] = field(default_factory=list)
    is_initial_load: bool = False
    # Only the first batch of a session shows the loading spinner
    show_loading_indicator: bool = False
    error: Optional[str] = None
    # False when the batch was started before a filter change and was dropped
    is_current: bool = True


class FeedController:
    def __init__(
        self,
        search_client: AICSearchClient,
        filter_config: Optional[FilterConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        self.search_client = search_client
        self.filter_config = filter_config or FilterConfig()
        self.rng = rng or random.Random()
        self.state = FeedState.IDLE
        self.displayed: list[ArtworkRecord] = []
        self.displayed_count = 0
        self.signal: PaginationSignal[FeedUpdate] = PaginationSignal(
            self._load_next_batch
        )
        self._needs_initial_load = True
        self._generation = 0
        self._lock = threading.Lock()

    @property
    def needs_initial_load(self) -> bool:
        return self._needs_initial_load

    @property
    def has_started(self) -> bool:
        """True once the initial load for the current filters has begun."""
        return not self._needs_initial_load

    def start(self) -> Optional[FeedUpdate]:
        """
        Initial load (page opened, or filters changed).
        Returns None if a batch is already loading.
        """
        with self._lock:
            if self.state is FeedState.LOADING:
                return None
            self.signal.disarm()
            self.state = FeedState.LOADING
            self._needs_initial_load = False
        return self._load_batch(is_initial_load=True)

    def load_more(self) -> Optional[FeedUpdate]:
        """
        Called when the infinite scroll sentinel comes into view.
        Returns None if the trigger was not armed (a batch is in flight).
        """
        return self.signal.fire()

    def _load_next_batch(self) -> FeedUpdate:
        with self._lock:
            self.state = FeedState.LOADING
        return self._load_batch(is_initial_load=False)

    def _load_batch(self, is_initial_load: bool) -> FeedUpdate:
        with self._lock:
            generation = self._generation
            request_config = self.filter_config.snapshot()
        result = self.search_client.fetch_batch(request_config)
        records = shuffle_records(result.records, self.rng)

        with self._lock:
            self.state = FeedState.IDLE
            if generation != self._generation:
                logger.info("Filters changed while loading, dropping stale batch")
                return FeedUpdate(is_initial_load=is_initial_load, is_current=False)
            # Ids reach the session config only if the filters did not change meanwhile
            self.filter_config.mark_seen(request_config.seen_ids)
            self.displayed.extend(records)
            del self.displayed[:-MAX_DISPLAYED_RECORDS]
            self.displayed_count += len(records)

        # Re-armed after empty batches too, so the feed can pick up again later
        self.signal.arm()

        if not records:
            logger.info(
                f"Empty batch (initial={is_initial_load}, error={result.error})"
            )

        return FeedUpdate(
            records=records,
            is_initial_load=is_initial_load,
            show_loading_indicator=is_initial_load,
            error=result.error,
        )

    def update_filters(self, **changes: Any) -> bool:
        """
        Apply filter changes. If anything actually changed, the seen ids and
        the displayed posts are cleared and the next load is an initial load.

        Returns:
            True if the filters changed.

        Raises:
            ValueError: On unknown filter names.
        """
        unknown = set(changes) - set(FILTER_FIELDS)
        if unknown:
            raise ValueError(f"Unknown filter(s): {', '.join(sorted(unknown))}")

        if "artwork_type_ids" in changes:
            changes["artwork_type_ids"] = set(changes["artwork_type_ids"])

        current = self.filter_config.filters()
        changed = {name: value for name, value in changes.items() if current[name] != value}
        if not changed:
            return False

        with self._lock:
            for name, value in changed.items():
                setattr(self.filter_config, name, value)
            self.filter_config.reset_seen()
            self.displayed.clear()
            self.displayed_count = 0
            self.signal.disarm()
            self._needs_initial_load = True
            self._generation += 1

        logger.info(f"Filters changed ({', '.join(sorted(changed))}), feed reset")
        return True
