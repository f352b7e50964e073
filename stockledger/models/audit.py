"""
AuditLog model — Who did what to the ledger.
"""

from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


class AuditLog(models.Model):
    """Row written by DatabaseAuditSink after each mutating ledger call."""

    actor_id = models.CharField(max_length=64, blank=True, default='', verbose_name=_('Actor'))
    action = models.CharField(max_length=100, verbose_name=_('Action'))
    details = models.TextField(blank=True, default='', verbose_name=_('Details'))
    timestamp = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        verbose_name = _('Audit entry')
        verbose_name_plural = _('Audit log')
        ordering = ['-timestamp', '-pk']

    def __str__(self) -> str:
        return f"{self.timestamp:%Y-%m-%d %H:%M} {self.action}"
