"""Exceptions raised while building or querying a morphology."""


class MorphologyError(Exception):
    """Base class for the errors of this package."""


class MalformedTraceError(MorphologyError, ValueError):
    """The point table cannot be turned into a tree (e.g. a parent is missing or comes too late)."""


class SectionNotFoundError(MorphologyError, KeyError):
    """No section has the requested id."""

    def __init__(self, section_id):
        super().__init__(section_id)
        self.section_id = section_id

    def __str__(self) -> str:
        return f"No section with id {self.section_id}"
