"""
Django admin registrations for the registry models.

The admin site is where the ``admin`` role is granted to accounts
created through sign-up, and where records can be inspected by hand.
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import User, Registration, AuditEvent


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ('username', 'email', 'role', 'is_staff', 'is_superuser')
    list_filter = ('role', 'is_staff')
    search_fields = ('username', 'email', 'first_name', 'last_name')
    fieldsets = BaseUserAdmin.fieldsets + (('Role', {'fields': ('role',)}),)


@admin.register(Registration)
class RegistrationAdmin(admin.ModelAdmin):
    list_display = ('name', 'surname', 'mobile_number', 'age', 'hypertension', 'sugar', 'created_at')
    list_filter = ('hypertension', 'sugar')
    search_fields = ('name', 'surname', 'mobile_number', 'aadhaar_number')
    readonly_fields = ('id', 'created_at', 'updated_at')


@admin.register(AuditEvent)
class AuditEventAdmin(admin.ModelAdmin):
    list_display = ('action', 'object_type', 'object_id', 'user', 'created_at')
    list_filter = ('action',)
    search_fields = ('object_id', 'user__username')
