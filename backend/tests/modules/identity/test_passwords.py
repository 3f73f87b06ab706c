"""Tests for password hashing."""

from modules.identity.passwords import hash_password, verify_password


class TestPasswords:
    def test_hash_is_scrypt_with_fixed_parameters(self):
        hashed = hash_password("secret1")
        assert hashed.startswith("$scrypt$ln=14,r=8,p=1$")
        assert "secret1" not in hashed

    def test_fresh_salt_per_hash(self):
        assert hash_password("secret1") != hash_password("secret1")

    def test_verify_roundtrip(self):
        hashed = hash_password("secret1")
        assert verify_password("secret1", hashed) is True
        assert verify_password("secret2", hashed) is False

    def test_missing_hash_never_verifies(self):
        assert verify_password("secret1", None) is False
        assert verify_password("secret1", "") is False

    def test_malformed_hash_never_verifies(self):
        assert verify_password("secret1", "plaintext-password") is False
