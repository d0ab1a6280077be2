"""
Exception taxonomy for the fellowship engine.

Configuration problems (unknown leader, missing segment, unreadable catalog)
are fatal to the operation that hit them and surface to the caller.
An out-of-range draft choice is not an error; it is a skip.
"""


class FellowshipError(Exception):
    """Base class for engine errors."""
    pass


class ConfigurationError(FellowshipError):
    """The content catalog or run setup is unusable."""
    pass


class LeaderNotFoundError(ConfigurationError):
    """Run creation referenced a leader the catalog doesn't define."""
    def __init__(self, leader_id: str):
        self.leader_id = leader_id
        super().__init__(f"Leader not found: {leader_id}")


class SegmentNotFoundError(ConfigurationError):
    """The run has no segment for its current index."""
    def __init__(self, segment_index: int):
        self.segment_index = segment_index
        super().__init__(f"Segment not found: {segment_index}")


class CatalogLoadError(ConfigurationError):
    """A catalog file could not be read or validated."""
    pass


class EmptyInputError(FellowshipError, ValueError):
    """Random pick from an empty candidate list."""
    def __init__(self, what: str = "list"):
        self.what = what
        super().__init__(f"Cannot pick from empty {what}")
