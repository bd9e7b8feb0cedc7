class ChainClientError(Exception):
    """The node could not be reached or returned an unusable response."""


class DataIntegrityError(Exception):
    """Node data does not line up (heights, validator and commit slots)."""
