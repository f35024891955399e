from typing import Optional


class CoreError(Exception):
    """Base class for blob storage failures"""


class SizeMismatch(CoreError):
    pass


class NetworkFailure(CoreError):
    pass


class DataNotFound(NetworkFailure):
    pass


class DryRunUnsupported(CoreError):
    pass


class Unexpected(CoreError):
    pass


class BlobStorageError(Exception):
    """Uniform error type seen by callers of a storage adapter.

    Displays exactly like the wrapped error. ``cause`` delegates one level
    down to the wrapped error's own cause instead of re-wrapping it.
    """

    def __init__(self, error: CoreError):
        super().__init__(error)
        self.error = error

    def __str__(self):
        return str(self.error)

    @property
    def cause(self) -> Optional[BaseException]:
        return self.error.__cause__

    @classmethod
    def wrap(cls, exc: BaseException) -> 'BlobStorageError':
        if isinstance(exc, cls):
            return exc
        if not isinstance(exc, CoreError):
            error = NetworkFailure(str(exc))
            error.__cause__ = exc
            exc = error
        return cls(exc)
