#!/usr/bin/env python3
"""
Location Resolver Module

Resolves the relayed marker frame in the map frame and records the result in
the target catalog under the most recently observed marker id.
"""

import time
from typing import Callable

from ..catalog import TargetCatalog
from ..exceptions import TransformUnavailableError
from .marker_channel import MarkerIdChannel


class LocationResolver:
    """
    Non-blocking map-frame lookup with a fixed retry interval.

    Call attempt() every control tick while scanning. A failed lookup arms a
    retry timer instead of sleeping, and attempts made before it expires
    return immediately without touching the transform store.
    """

    def __init__(
        self,
        transform_source,
        catalog: TargetCatalog,
        channel: MarkerIdChannel,
        logger,
        target_frame: str = 'map',
        source_frame: str = 'secondary_frame',
        retry_interval: float = 1.0,
        clock: Callable[[], float] = time.monotonic
    ):
        """
        Initialize location resolver.

        Args:
            transform_source: Object with lookup_planar(target, source, not_before) -> (x, y)
                              raising TransformUnavailableError when the chain is
                              missing or older than `not_before`
            catalog: Catalog the resolved locations are written into
            channel: Marker id hand-off from the frame relay
            logger: Node logger
            target_frame: Global frame to resolve into
            source_frame: Frame whose origin is the marker location
            retry_interval: Seconds to wait after a failed lookup
            clock: Monotonic time source in seconds
        """
        self.transform_source = transform_source
        self.catalog = catalog
        self.channel = channel
        self.target_frame = target_frame
        self.source_frame = source_frame
        self.retry_interval = retry_interval
        self.clock = clock
        self.logger = logger

        self.failed_attempts = 0
        self._retry_at = None

    @property
    def is_backing_off(self) -> bool:
        return self._retry_at is not None and self.clock() < self._retry_at

    def reset(self):
        """Forget failures and any pending backoff."""
        self.failed_attempts = 0
        self._retry_at = None

    def attempt(self) -> bool:
        """
        Try once to localize the latest observed marker.

        Returns:
            True if a new marker location was recorded
        """
        if self.is_backing_off:
            return False

        # Read the id exactly once; everything below uses this value
        pending = self.channel.pending()
        if pending is None:
            return False
        marker_id, stamp = pending

        try:
            x, y = self.transform_source.lookup_planar(
                self.target_frame, self.source_frame, not_before=stamp
            )
        except TransformUnavailableError as ex:
            self.failed_attempts += 1
            self._retry_at = self.clock() + self.retry_interval
            self.logger.warning(
                f"Lookup {self.target_frame} -> {self.source_frame} failed "
                f"({self.failed_attempts}): {ex}"
            )
            return False

        self.reset()
        if not self.channel.consume(marker_id):
            # A newer marker was relayed during the lookup; resolve that one next
            return False

        if not self.catalog.record_marker(marker_id, x, y):
            self.logger.debug(
                f"Marker {marker_id} already localized; still looking for a new marker."
            )
            return False

        self.logger.info(
            f"Marker {marker_id} position in {self.target_frame} frame: [{x:.3f}, {y:.3f}]"
        )
        return True
