# backend/accounts/models.py

from django.contrib.auth.models import AbstractUser
from django.db import models


class UserRole(models.TextChoices):
    ADMIN = 'ADMIN', 'Admin'
    INTERNAL_STAFF = 'INTERNAL_STAFF', 'Internal Staff'
    CUSTOMER = 'CUSTOMER', 'Customer'


class CustomUser(AbstractUser):
    role = models.CharField(max_length=20, choices=UserRole.choices, default=UserRole.CUSTOMER)

    @property
    def is_pricing_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def is_internal(self) -> bool:
        return self.role in (UserRole.ADMIN, UserRole.INTERNAL_STAFF)

    def __str__(self):
        return f"{self.username} ({self.get_role_display()})"
