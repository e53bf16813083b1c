"""Management command to fetch and store the current exchange rates."""

from django.core.management.base import BaseCommand, CommandError

from django_fxmoney.exceptions import FxMoneyError
from django_fxmoney.services import refresh_rates


class Command(BaseCommand):
    help = "Fetch exchange rates from the configured provider and store today's snapshot"

    def add_arguments(self, parser):
        parser.add_argument(
            "--base",
            type=str,
            help="Base currency (defaults to FXMONEY_BASE_CURRENCY)",
        )

    def handle(self, *args, **options):
        try:
            snapshot = refresh_rates(base=options.get("base"))
        except FxMoneyError as e:
            raise CommandError(f"Failed to refresh exchange rates: {e}")

        self.stdout.write(self.style.SUCCESS(
            f"Stored {snapshot.base} rates for {snapshot.date} from {snapshot.source}"
        ))
        for code, rate in sorted(snapshot.rates.items()):
            self.stdout.write(f"  {code}: {rate}")
