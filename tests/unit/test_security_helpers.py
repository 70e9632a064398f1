"""
Unit tests for password hashing, API key generation and log redaction
"""

import pytest

from taskapi.auth.password import generate_api_key, hash_password, verify_password
from taskapi.logging_config import mask_credential, redact_sensitive_fields


@pytest.mark.unit
class TestPasswordHashing:
    """Test bcrypt hashing via passlib"""

    def test_hash_is_not_plain_text(self):
        hashed = hash_password("SecurePass123!")

        assert hashed != "SecurePass123!"
        assert hashed.startswith("$2")

    def test_verify_correct_password(self):
        hashed = hash_password("SecurePass123!")

        assert verify_password("SecurePass123!", hashed)

    def test_verify_wrong_password(self):
        hashed = hash_password("SecurePass123!")

        assert not verify_password("WrongPass123!", hashed)

    def test_verify_unknown_hash_format(self):
        assert not verify_password("SecurePass123!", "not-a-hash")


@pytest.mark.unit
class TestAPIKeyGeneration:
    """Test API key format"""

    def test_thirty_two_hex_characters(self):
        key = generate_api_key()

        assert len(key) == 32
        int(key, 16)

    def test_keys_are_unique(self):
        assert len({generate_api_key() for _ in range(50)}) == 50


@pytest.mark.unit
class TestLogRedaction:
    """Test that credentials never reach log output"""

    def test_mask_keeps_short_prefix(self):
        assert mask_credential("0123456789abcdef") == "0123***"

    def test_mask_short_value_entirely(self):
        assert mask_credential("abc") == "***"

    def test_redact_event_dict(self):
        event = {
            "event": "User registered",
            "api_key": "0123456789abcdef",
            "password": "SecurePass123!",
            "password_hash": "$2b$12$abcdefghijklmnop",
            "user_id": 3,
        }

        redacted = redact_sensitive_fields(None, "info", event)

        assert redacted["api_key"] == "0123***"
        assert redacted["password"] == "***"
        assert redacted["password_hash"] == "***"
        assert redacted["user_id"] == 3
        assert redacted["event"] == "User registered"
