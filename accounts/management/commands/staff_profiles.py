from django.core.management.base import BaseCommand

from accounts import directory
from accounts.conf import get_store


class Command(BaseCommand):
    help = "List staff profile records in the key-value store and report unreadable ones."

    def add_arguments(self, parser):
        parser.add_argument("--incomplete", action="store_true", help="Only show profiles still awaiting completion.")

    def handle(self, *args, **opts):
        result = directory.scan(get_store())
        profiles = result.profiles
        if opts["incomplete"]:
            profiles = [p for p in profiles if not p.is_complete]

        for p in profiles:
            state = "complete" if p.is_complete else "incomplete"
            self.stdout.write(f"{p.user_id}\t{p.username}\t{p.email}\t{state}")

        for key in result.corrupt_keys:
            self.stdout.write(self.style.WARNING(f"Unreadable record: {key}"))

        self.stdout.write(self.style.SUCCESS(
            f"Done. profiles={len(profiles)}, corrupt={len(result.corrupt_keys)}"
        ))
