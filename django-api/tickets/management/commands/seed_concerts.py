"""Seed the concert catalog when it is empty."""

import logging
from datetime import datetime

from django.core.management.base import BaseCommand
from django.utils import timezone

from tickets.domain.errors import HandleTakenError
from tickets.handlers.dependencies import get_account_service
from tickets.models import Concert

logger = logging.getLogger(__name__)

CATALOG = [
    {
        "name": "POISONYA SYNDROME",
        "artist": "Nekomata Okayu",
        "price": 50,
        "stock": 3000,
        "venue": "Tachikawa Stage Garden",
        "date": datetime(2026, 11, 15, 20, 0),
    },
    {
        "name": "Ahoy!! You're All Pirates",
        "artist": "Houshou Marine",
        "price": 70,
        "stock": 20000,
        "venue": "K-Arena",
        "date": datetime(2026, 2, 10, 19, 0),
    },
]


class Command(BaseCommand):
    help = "Create the starter concert catalog and, optionally, a demo buyer."

    def add_arguments(self, parser):
        parser.add_argument("--demo-handle", help="Also register this buyer handle.")
        parser.add_argument("--demo-password", help="Password for the demo buyer.")

    def handle(self, *args, **options):
        if Concert.objects.exists():
            self.stdout.write("Catalog already seeded, skipping concerts.")
        else:
            Concert.objects.bulk_create(
                Concert(**{**entry, "date": timezone.make_aware(entry["date"])})
                for entry in CATALOG
            )
            logger.info("Seeded %d concerts", len(CATALOG))
            self.stdout.write(self.style.SUCCESS(f"Seeded {len(CATALOG)} concerts."))

        handle, password = options["demo_handle"], options["demo_password"]
        if handle and password:
            try:
                get_account_service().register(handle, password)
            except HandleTakenError:
                self.stdout.write(f"Buyer {handle} already exists, skipping.")
            else:
                self.stdout.write(self.style.SUCCESS(f"Registered buyer {handle}."))
