"""Exception hierarchy for indexing runs; nothing here is retried internally"""


class DocSearchError(Exception):
    """Base class for every failure that aborts an indexing run."""


class SourceError(DocSearchError):
    """A version directory or document file could not be enumerated or read."""


class ParseError(DocSearchError):
    """A document could not be parsed into blocks."""


class ClassificationError(DocSearchError):
    """A block has no recognised tag or weight mapping."""


class BackendError(DocSearchError):
    """The search backend rejected an operation."""


class BackendWriteError(BackendError):
    pass


class BackendSettingsError(BackendError):
    pass


class BackendPublishError(BackendError):
    pass
