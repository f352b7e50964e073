"""
Minimal product catalog used by the Stockledger test suite.

Stockledger only reads ``name``, ``low_stock_threshold`` and ``cost_price``.
"""

from django.db import models


class Product(models.Model):
    name = models.CharField(max_length=100)
    sku = models.SlugField(unique=True)
    low_stock_threshold = models.IntegerField(null=True, blank=True)
    cost_price = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)

    def __str__(self) -> str:
        return self.name
