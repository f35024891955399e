from blobstorage.errors import (
    BlobStorageError, DataNotFound, NetworkFailure, SizeMismatch
)


class TestBlobStorageError:
    def test_displays_like_wrapped_error(self):
        error = SizeMismatch("Requested `name` is incorrect size")

        assert str(BlobStorageError(error)) == "Requested `name` is incorrect size"
        assert BlobStorageError(error).error is error

    def test_cause_delegates_one_level(self):
        """Test cause returns the wrapped error's own cause"""
        root = OSError("socket closed")
        error = NetworkFailure("store failed")
        error.__cause__ = root

        assert BlobStorageError(error).cause is root
        assert BlobStorageError(DataNotFound("missing")).cause is None

    def test_wrap_foreign_exception(self):
        """Test non core errors become network failures chained to the original"""
        original = ConnectionError("relay unreachable")

        wrapped = BlobStorageError.wrap(original)

        assert isinstance(wrapped.error, NetworkFailure)
        assert str(wrapped) == "relay unreachable"
        assert wrapped.cause is original

    def test_wrap_keeps_core_errors(self):
        error = DataNotFound("missing")

        assert BlobStorageError.wrap(error).error is error

    def test_wrap_does_not_rewrap(self):
        error = BlobStorageError(SizeMismatch("bad"))

        assert BlobStorageError.wrap(error) is error
