"""Error types raised inside the aggregation pipeline."""

from __future__ import annotations


class ProviderUnavailable(RuntimeError):
    """A provider is missing its credential or could not be reached."""


class MalformedProviderPayload(RuntimeError):
    """A provider answered with a payload of an unexpected shape."""


class PaperNotFoundError(LookupError):
    """No paper exists at the requested position of the current corpus."""

    def __init__(self, index: int, corpus_size: int) -> None:
        super().__init__(f"Paper not found: index={index} corpus_size={corpus_size}")
        self.index = index
        self.corpus_size = corpus_size
