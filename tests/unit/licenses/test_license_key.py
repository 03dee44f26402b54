"""
Unit tests for license key generation.
"""
import re

import pytest

from licenses.domain.license_key import KEY_ALPHABET, MAX_KEY_LENGTH, generate_license_key

KEY_SHAPE = re.compile(r"^VIRI(-[ABCDEFGHJKLMNPQRSTUVWXYZ2-9]{4}){4}$")


class TestGenerateLicenseKey:
    """Tests for generate_license_key."""

    def test_known_bytes(self):
        """Each byte picks the alphabet character at byte % 32."""
        assert generate_license_key(bytes(range(16))) == "VIRI-ABCD-EFGH-JKLM-NPQR"

    def test_bytes_wrap_around_alphabet(self):
        assert generate_license_key(bytes([32] * 16)) == "VIRI-AAAA-AAAA-AAAA-AAAA"
        assert generate_license_key(bytes([255] * 16)) == "VIRI-9999-9999-9999-9999"

    def test_random_keys_have_key_shape(self):
        for _ in range(50):
            key = generate_license_key()
            assert KEY_SHAPE.match(key)
            assert len(key) <= MAX_KEY_LENGTH

    def test_random_keys_differ(self):
        keys = {generate_license_key() for _ in range(100)}
        assert len(keys) == 100

    @pytest.mark.parametrize("size", [0, 15, 17])
    def test_wrong_byte_count(self, size):
        with pytest.raises(ValueError):
            generate_license_key(bytes(size))

    def test_alphabet_excludes_ambiguous_characters(self):
        for char in "IO01":
            assert char not in KEY_ALPHABET

