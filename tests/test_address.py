import hashlib

import pytest
from nostr_sdk import Keys

from blobstorage.address import (
    BlobAddress, BlobKind, PublicBlob, PrivateBlob, make_blob, blob_name, owner_bytes
)
from blobstorage.constants import XOR_NAME_LEN


class TestContentAddressing:
    def test_public_name_is_sha3_of_content(self):
        """Test public names hash the content alone"""
        blob = PublicBlob(b"hello")

        assert blob.name == hashlib.sha3_256(b"hello").digest()
        assert len(blob.name) == XOR_NAME_LEN
        assert blob.owner is None

    def test_public_name_is_deterministic(self):
        """Test the same bytes always give the same name"""
        assert blob_name(b"hello", True) == blob_name(b"hello", True)
        assert PublicBlob(b"hello").address == PublicBlob(b"hello").address

    def test_private_names_differ_per_owner(self):
        """Test identical content under two owners gives two names"""
        owner_a = Keys.generate().public_key()
        owner_b = Keys.generate().public_key()

        assert PrivateBlob(b"hello", owner_a).name != PrivateBlob(b"hello", owner_b).name
        assert PrivateBlob(b"hello", owner_a).name == PrivateBlob(b"hello", owner_a).name

    def test_private_differs_from_public(self):
        owner = Keys.generate().public_key()

        assert PrivateBlob(b"hello", owner).name != PublicBlob(b"hello").name
        assert PrivateBlob(b"hello", owner).address.kind is BlobKind.PRIVATE

    def test_owner_key_or_raw_bytes(self):
        """Test an owner can be given as a key or as its raw bytes"""
        owner = Keys.generate().public_key()
        raw = owner_bytes(owner)

        assert len(raw) == 32
        assert PrivateBlob(b"data", owner).name == PrivateBlob(b"data", raw).name

    def test_content_separation(self):
        assert blob_name(b"a", True) != blob_name(b"b", True)

    def test_private_content_separation(self):
        """Test one owner gets distinct names for distinct content"""
        owner = Keys.generate().public_key()

        assert blob_name(b"a", False, owner) != blob_name(b"b", False, owner)

    def test_name_length_independent_of_input_size(self):
        for data in (b"", b"x", b"x" * 100000):
            assert len(blob_name(data, True)) == XOR_NAME_LEN

    def test_make_blob_private_requires_owner(self):
        with pytest.raises(ValueError):
            make_blob(b"data", published=False)


class TestBlobAddress:
    def test_rejects_wrong_name_length(self):
        with pytest.raises(ValueError):
            BlobAddress(BlobKind.PUBLIC, b"\x00" * 10)

    def test_variant_is_part_of_identity(self):
        """Test same name under different variants are distinct addresses"""
        name = b"\x01" * XOR_NAME_LEN

        assert BlobAddress.from_name(name, True) != BlobAddress.from_name(name, False)
        assert BlobAddress.from_name(name, True) == BlobAddress(BlobKind.PUBLIC, name)

    def test_str_and_hex(self):
        address = BlobAddress(BlobKind.PRIVATE, b"\xab" * XOR_NAME_LEN)

        assert address.hex == "ab" * XOR_NAME_LEN
        assert str(address) == "private:" + "ab" * XOR_NAME_LEN
        assert not address.published
