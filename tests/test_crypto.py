"""
Tests for Members Only Credential Module
"""

from membersonly.core.crypto import CryptoManager


class TestCryptoManager:
    """Tests for CryptoManager class."""

    def setup_method(self):
        """Set up test fixtures."""
        # Use minimal memory for faster tests
        self.crypto = CryptoManager(
            time_cost=1,
            memory_cost_kb=8192,  # 8MB for tests
            parallelism=1
        )

    def test_hash_password(self):
        """Test password hashing."""
        password = "secret1"
        hash1 = self.crypto.hash_password(password)
        hash2 = self.crypto.hash_password(password)

        # Hashes should be different (different salts)
        assert hash1 != hash2
        assert password not in hash1
        assert hash1.startswith("$argon2id$")

        # Both should verify
        assert self.crypto.verify_password(password, hash1)
        assert self.crypto.verify_password(password, hash2)

    def test_verify_password_wrong(self):
        """Test password verification with wrong password."""
        hash_str = self.crypto.hash_password("correct_password")

        assert self.crypto.verify_password("correct_password", hash_str) is True
        assert self.crypto.verify_password("wrong_password", hash_str) is False

    def test_verify_password_garbage_hash(self):
        """A corrupt stored hash fails verification instead of raising."""
        assert self.crypto.verify_password("secret1", "not-a-hash") is False
        assert self.crypto.verify_password("secret1", "") is False

    def test_needs_rehash(self):
        """Hashes made with other cost parameters are flagged for rehash."""
        stronger = CryptoManager(time_cost=2, memory_cost_kb=8192, parallelism=1)
        old_hash = self.crypto.hash_password("secret1")

        assert self.crypto.needs_rehash(old_hash) is False
        assert stronger.needs_rehash(old_hash) is True
        # Still verifies with the new parameters
        assert stronger.verify_password("secret1", old_hash)
