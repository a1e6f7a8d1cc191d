"""
Core models - shared abstract bases.
"""

from django.db import models


class TimestampedModel(models.Model):
    """
    Abstract base for catalog models.

    Provides created/updated timestamps.
    """

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
