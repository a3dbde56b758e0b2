"""
Database models for the sangat registration backend.

A :class:`Registration` holds one elderly sangat member: identity and
contact numbers, a few health flags shown on the badge and an optional
photo.  Accounts are plain Django users with a ``role``; only users with
the ``admin`` role may manage registrations or print badges.
"""
from __future__ import annotations

import uuid

from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    """Custom user model with a role.

    Sign-up creates ``user`` accounts; the ``admin`` role has to be
    granted separately (Django admin or ``manage.py ensure_admin``).
    """
    ROLE_ADMIN = 'admin'
    ROLE_USER = 'user'
    ROLE_CHOICES = [
        (ROLE_USER, 'User'),
        (ROLE_ADMIN, 'Administrator'),
    ]
    role = models.CharField(max_length=10, choices=ROLE_CHOICES, default=ROLE_USER, db_index=True)

    @property
    def is_admin(self) -> bool:
        return self.role == self.ROLE_ADMIN

    def __str__(self) -> str:
        return f"{self.username} ({self.role})"


class Registration(models.Model):
    """A registered sangat member."""
    YES_NO_CHOICES = [
        ('Yes', 'Yes'),
        ('No', 'No'),
    ]
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100)
    surname = models.CharField(max_length=100)
    mobile_number = models.CharField(max_length=10, db_index=True)
    alternate_mobile_number = models.CharField(max_length=10, blank=True, null=True)
    emergency_contact_number = models.CharField(max_length=10)
    aadhaar_number = models.CharField(max_length=12, db_index=True)
    address = models.TextField(blank=True, null=True)
    age = models.PositiveSmallIntegerField(blank=True, null=True)
    bp = models.CharField(max_length=32, blank=True, null=True)
    hypertension = models.CharField(max_length=3, choices=YES_NO_CHOICES, blank=True, null=True)
    sugar = models.CharField(max_length=3, choices=YES_NO_CHOICES, blank=True, null=True)
    # Name of the stored photo inside the default storage; see services.storage
    image = models.CharField(max_length=255, blank=True, null=True)
    created_by = models.ForeignKey(
        User, null=True, blank=True, on_delete=models.SET_NULL, related_name='registrations'
    )
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']

    @property
    def full_name(self) -> str:
        return f"{self.name} {self.surname}".strip()

    def __str__(self) -> str:
        return f"{self.full_name} ({self.mobile_number})"


class AuditEvent(models.Model):
    user = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True)
    action = models.CharField(max_length=64)
    object_type = models.CharField(max_length=64, blank=True, null=True)
    object_id = models.CharField(max_length=64, blank=True, null=True)
    detail = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['action', 'created_at'], name='audit_action_created_idx'),
            models.Index(fields=['object_type', 'object_id', 'created_at'], name='audit_object_created_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.action}:{self.user_id}@{self.created_at:%F %T}"
