import hashlib
import hmac

from django.db import models
from django.utils import timezone


def hash_password(raw_password: str) -> str:
    # Unsalted SHA-256 hex digest, the format existing admin rows are stored in.
    return hashlib.sha256(raw_password.encode("utf-8")).hexdigest()


class AdminUser(models.Model):
    username = models.CharField(max_length=150, unique=True)
    password_hash = models.CharField(max_length=128)
    created_at = models.DateTimeField(default=timezone.now)

    def __str__(self):
        return self.username

    def set_password(self, raw_password: str):
        self.password_hash = hash_password(raw_password)

    def check_password(self, raw_password: str) -> bool:
        return hmac.compare_digest(self.password_hash, hash_password(raw_password))
