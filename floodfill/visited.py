"""
Visited-coordinate tracking for flood fill traversal.

The tracker keeps a dense state buffer sized to the traversal region. Each
coordinate is in one of three states:

- STATE_NONE: not yet considered
- STATE_REJECTED: considered and excluded by the inclusion predicate
- STATE_ACCEPTED: a seed, or a neighbor accepted by the predicate

Both rejected and accepted coordinates count as visited.
"""

from typing import Sequence

import numpy as np

from floodfill.region import Region

# Visit state constants
STATE_NONE = 0
STATE_REJECTED = 1
STATE_ACCEPTED = 2


class VisitedTracker:
    """Dense visited buffer over a region with O(1) lookup and insert."""

    def __init__(self, region: Region):
        self.region = region
        self.state = np.zeros(region.size, dtype=np.uint8)
        self.visited_count = 0

    def mark_visited(self, coord: Sequence[int], accepted: bool = True):
        """
        Mark a coordinate as visited.

        Args:
            coord: Coordinate inside the tracker region
            accepted: Whether the coordinate belongs to the fill
        """
        pos = self.region.relative(coord)
        if self.state[pos] == STATE_NONE:
            self.visited_count += 1
        self.state[pos] = STATE_ACCEPTED if accepted else STATE_REJECTED

    def is_visited(self, coord: Sequence[int]) -> bool:
        return self.state[self.region.relative(coord)] != STATE_NONE

    def is_accepted(self, coord: Sequence[int]) -> bool:
        return self.state[self.region.relative(coord)] == STATE_ACCEPTED

    def accepted_mask(self) -> np.ndarray:
        """Boolean copy of the buffer, True where coordinates were accepted."""
        return self.state == STATE_ACCEPTED

    def clear(self):
        """Forget every visited coordinate."""
        self.state.fill(STATE_NONE)
        self.visited_count = 0
