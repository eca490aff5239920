"""
Django management command to issue an API key.

The raw key is printed once; only its hash is stored.
"""

from datetime import timedelta

from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from core.infrastructure.models import SCOPE_FULL, SCOPE_READ, ApiKey


class Command(BaseCommand):
    """Command to issue an API key for the brand API."""

    help = "Issue an API key for the /api/v1/ endpoints"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--name",
            type=str,
            required=True,
            help="Who or what will use the key",
        )
        parser.add_argument(
            "--scope",
            choices=[SCOPE_FULL, SCOPE_READ],
            default=SCOPE_FULL,
            help="full (default) or read (GET requests only)",
        )
        parser.add_argument(
            "--expires-in-days",
            type=int,
            default=None,
            help="Days until the key expires (default: never)",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        days = options["expires_in_days"]
        if days is not None and days < 1:
            raise CommandError("--expires-in-days must be at least 1")
        expires_at = timezone.now() + timedelta(days=days) if days else None

        api_key, raw_key = ApiKey.issue(
            name=options["name"], scope=options["scope"], expires_at=expires_at
        )

        # pylint: disable=no-member
        self.stdout.write(self.style.SUCCESS(f"Created API key '{api_key.name}' ({api_key.scope})"))
        self.stdout.write(raw_key)
        self.stdout.write(self.style.WARNING("Save this API key - it cannot be retrieved later!"))
        if expires_at:
            self.stdout.write(f"Expires at: {expires_at.isoformat()}")
