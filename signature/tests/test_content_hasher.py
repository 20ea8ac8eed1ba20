"""Content digests and lineage."""

from __future__ import annotations

import hashlib
import unittest

from signature.logic.content_hasher import digest, new_lineage, update_lineage


class TestContentHasher(unittest.TestCase):
    def test_digest_is_deterministic_sha256(self) -> None:
        data = b"%PDF-1.7 example"
        self.assertEqual(digest(data), digest(bytes(data)))
        self.assertEqual(digest(data), hashlib.sha256(data).hexdigest())
        self.assertEqual(len(digest(data)), 64)

    def test_single_bit_flip_changes_digest(self) -> None:
        data = bytearray(b"some document bytes")
        flipped = bytearray(data)
        flipped[3] ^= 0x01
        self.assertNotEqual(digest(data), digest(flipped))

    def test_digest_rejects_text(self) -> None:
        with self.assertRaises(TypeError):
            digest("not bytes")  # type: ignore[arg-type]

    def test_update_lineage_keeps_original(self) -> None:
        lineage = new_lineage(b"original")
        self.assertIsNone(lineage.signed_digest)

        first = update_lineage(lineage, b"signed-1")
        second = update_lineage(first, b"signed-2")
        self.assertEqual(first.original_digest, digest(b"original"))
        self.assertEqual(second.original_digest, lineage.original_digest)
        self.assertEqual(first.signed_digest, digest(b"signed-1"))
        self.assertEqual(second.signed_digest, digest(b"signed-2"))


if __name__ == "__main__":
    unittest.main()
