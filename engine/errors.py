"""Exceptions raised by the MPI engine and its data collaborators."""


class MPIError(Exception):
    pass


class MalformedInputError(MPIError, ValueError):
    """A top-level payload does not have the shape the engine needs."""


class ProviderUnavailableError(MPIError):
    """A reference-data provider failed to deliver a dataset."""

    def __init__(self, listing_id: str, reason: str):
        super().__init__(f"Reference data unavailable for listing {listing_id}: {reason}")
        self.listing_id = listing_id
        self.reason = reason
