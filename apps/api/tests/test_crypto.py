import pytest
from cryptography.fernet import Fernet, InvalidToken

from app.core.crypto import SecretBox


def test_encrypted_value_is_not_plaintext():
    box = SecretBox(Fernet.generate_key().decode())

    token = box.encrypt("hunter2")

    assert token != "hunter2"
    assert box.decrypt(token) == "hunter2"


def test_other_key_cannot_decrypt():
    token = SecretBox(Fernet.generate_key().decode()).encrypt("hunter2")

    with pytest.raises(InvalidToken):
        SecretBox(Fernet.generate_key().decode()).decrypt(token)
