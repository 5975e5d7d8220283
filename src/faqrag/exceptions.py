"""Exceptions raised across the faqrag pipeline."""


class FaqragError(Exception):
    """Base class for faqrag domain errors."""


class InputError(FaqragError, ValueError):
    """The caller supplied a request that cannot be processed.

    Raised for an ingestion request without any source, or an empty question.
    """


class IngestionError(FaqragError, RuntimeError):
    """Ingestion ran but produced nothing worth storing."""
