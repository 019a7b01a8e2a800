"""
Application Exceptions
Error taxonomy shared by the services and translated to HTTP errors by the API.
"""


class SpeedReadError(Exception):
    """Base class for all application errors"""


class DefinitionLookupError(SpeedReadError, LookupError):
    """Definition service was unreachable or returned malformed data"""

    def __init__(self, word: str, reason: str):
        self.word = word
        self.reason = reason
        super().__init__(f"Definition lookup failed for '{word}': {reason}")


class SessionStateError(SpeedReadError):
    """Operation requires an open review session"""


class WordNotFoundError(SpeedReadError, KeyError):
    """No vocabulary word with the given id"""

    def __init__(self, word_id: str):
        self.word_id = word_id
        super().__init__(word_id)

    def __str__(self) -> str:
        return f"Word not found: {self.word_id}"


class StorageError(SpeedReadError):
    """Persisted vocabulary blob could not be read or written"""


class StoreVersionError(StorageError):
    """Persisted blob was written by a newer schema version"""

    def __init__(self, found: int, supported: int):
        self.found = found
        self.supported = supported
        super().__init__(
            f"Vocabulary store version {found} is newer than supported version {supported}"
        )


class VocabularyImportError(SpeedReadError, ValueError):
    """Import payload is not a valid vocabulary export"""
