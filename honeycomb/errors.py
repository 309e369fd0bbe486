class HoneycombError(Exception):
    """Base class for errors raised while building a puzzle."""


class MalformedInput(HoneycombError, ValueError):
    """The honeycomb or dictionary input does not describe a valid puzzle."""


class ResourceExhaustion(HoneycombError, MemoryError):
    """Trie or grid construction ran out of memory."""
