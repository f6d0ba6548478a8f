"""
Unit tests for request signing.
"""

import hashlib

from vbulletin_client.signing import md5_hex, sign


class TestSigning:
    """Test signature computation."""

    def test_md5_hex(self):
        """Test md5_hex matches hashlib."""
        assert md5_hex("pw") == hashlib.md5(b"pw").hexdigest()
        assert len(md5_hex("")) == 32

    def test_sign_concatenation_order(self):
        """Test signature is MD5 of token + client id + secret + key."""
        expected = hashlib.md5(b"tokcidseckey").hexdigest()
        assert sign("tok", "cid", "sec", "key") == expected

    def test_sign_deterministic(self):
        """Test the same inputs always give the same signature."""
        assert sign("a", "b", "c", "d") == sign("a", "b", "c", "d")

    def test_sign_each_input_matters(self):
        """Test changing any single input changes the signature."""
        base = sign("tok", "cid", "sec", "key")
        assert sign("tok2", "cid", "sec", "key") != base
        assert sign("tok", "cid2", "sec", "key") != base
        assert sign("tok", "cid", "sec2", "key") != base
        assert sign("tok", "cid", "sec", "key2") != base

    def test_sign_permutation_differs(self):
        """Test swapping fields gives a different signature."""
        assert sign("cid", "tok", "sec", "key") != sign("tok", "cid", "sec", "key")
