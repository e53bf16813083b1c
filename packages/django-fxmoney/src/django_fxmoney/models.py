"""Models for django-fxmoney."""

from django.db import models

from .currencies import Currency
from .rates import RateSnapshot


class ExchangeRateSnapshotQuerySet(models.QuerySet):
    def for_base(self, base: str):
        return self.filter(base=base)

    def latest_first(self):
        return self.order_by("-date", "-fetched_at")


class ExchangeRateSnapshot(models.Model):
    """
    A stored rate table for one base currency and one day.

    rates holds decimal strings keyed by currency code. The row with the
    latest date (then latest fetched_at) is the one conversions use.
    """

    base = models.CharField(max_length=3, choices=Currency.choices, default=Currency.USD)
    date = models.DateField()
    rates = models.JSONField(default=dict)
    fetched_at = models.DateTimeField()
    source = models.CharField(max_length=200, blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ExchangeRateSnapshotQuerySet.as_manager()

    class Meta:
        ordering = ["-date", "-fetched_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["base", "date"],
                name="fxmoney_one_snapshot_per_base_day",
            ),
        ]

    def __str__(self):
        return f"{self.base} rates for {self.date}"

    def to_snapshot(self) -> RateSnapshot:
        return RateSnapshot(
            base=self.base,
            date=self.date,
            rates=self.rates,
            fetched_at=self.fetched_at,
            source=self.source,
        )
