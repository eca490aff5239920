"""
API key model.

API keys are the credentials checked by the authentication
middleware in front of every /api/v1/ route.
"""

import hashlib
import secrets
import uuid
from typing import Optional, Tuple

from django.db import models
from django.utils import timezone

SCOPE_FULL = "full"
SCOPE_READ = "read"


def hash_key(raw_key: str) -> str:
    """Return the stored form of a raw API key."""
    return hashlib.sha256(raw_key.encode()).hexdigest()


class ApiKey(models.Model):
    """
    API key for catalog administrators.

    Only a SHA-256 hash of the key is stored; the raw key is
    available once, right after creation, as ``_raw_key``.
    """

    SCOPE_CHOICES = [
        (SCOPE_FULL, "Full Access"),
        (SCOPE_READ, "Read Only"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100, help_text="Who or what uses this key")
    key_prefix = models.CharField(max_length=8, editable=False)
    key_hash = models.CharField(max_length=64, editable=False, unique=True)
    scope = models.CharField(max_length=20, choices=SCOPE_CHOICES, default=SCOPE_FULL)
    expires_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    last_used_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "api_keys"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["key_hash"]),
        ]

    def __str__(self):
        return f"{self.name} - {self.key_prefix}..."

    def save(self, *args, **kwargs):
        """Generate API key on first save."""
        if not self.key_hash:
            raw_key = secrets.token_urlsafe(32)
            self.key_prefix = raw_key[:8]
            self.key_hash = hash_key(raw_key)
            # Store the raw key temporarily for retrieval
            self._raw_key = raw_key
        self.full_clean()
        super().save(*args, **kwargs)

    @classmethod
    def issue(
        cls,
        name: str,
        scope: str = SCOPE_FULL,
        expires_at=None,
    ) -> Tuple["ApiKey", str]:
        """
        Create a key and return it with its raw value.

        Args:
            name: Key owner label
            scope: 'full' or 'read'
            expires_at: Optional expiry datetime

        Returns:
            The saved ApiKey and the raw key string
        """
        api_key = cls(name=name, scope=scope, expires_at=expires_at)
        api_key.save()
        return api_key, api_key._raw_key  # pylint: disable=protected-access

    @classmethod
    def lookup(cls, raw_key: str) -> Optional["ApiKey"]:
        """Find the key matching a raw value, or None."""
        # pylint: disable=no-member
        return cls.objects.filter(key_hash=hash_key(raw_key)).first()

    def verify_key(self, raw_key: str) -> bool:
        """
        Verify a raw API key against the stored hash.

        Args:
            raw_key: The raw API key to verify

        Returns:
            True if key matches, False otherwise
        """
        return secrets.compare_digest(self.key_hash, hash_key(raw_key))

    def is_valid(self) -> bool:
        """
        Check if the API key is still valid.

        Returns:
            True if key is valid, False if expired
        """
        if self.expires_at and self.expires_at < timezone.now():
            return False
        return True

    def allows(self, method: str) -> bool:
        """Whether this key's scope permits the HTTP method."""
        if self.scope == SCOPE_FULL:
            return True
        return method.upper() in ("GET", "HEAD", "OPTIONS")

    def mark_used(self):
        """Update last_used_at timestamp."""
        self.last_used_at = timezone.now()
        # pylint: disable=no-member
        type(self).objects.filter(pk=self.pk).update(last_used_at=self.last_used_at)
