import base64
import os
from typing import Optional
from cryptography.fernet import Fernet

from app.core.config import settings


class SecretBox:
    def __init__(self, key: Optional[str] = None) -> None:
        # Expect a base64 urlsafe key. Without one, generate an ephemeral key (dev only)
        key = key or settings.encryption_key
        if key is None:
            key = base64.urlsafe_b64encode(os.urandom(32)).decode()
        self._fernet = Fernet(key)

    def encrypt(self, plaintext: str) -> str:
        token = self._fernet.encrypt(plaintext.encode("utf-8"))
        return token.decode("utf-8")

    def decrypt(self, ciphertext: str) -> str:
        return self._fernet.decrypt(ciphertext.encode("utf-8")).decode("utf-8")


secret_box = SecretBox()
