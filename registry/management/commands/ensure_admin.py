# registry/management/commands/ensure_admin.py
import os

from django.core.management.base import BaseCommand, CommandError
from registry.models import User


class Command(BaseCommand):
    help = "Create or promote an account with the admin role (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument("username")
        parser.add_argument("--email", default="")
        parser.add_argument(
            "--password",
            default=os.getenv("ADMIN_PASSWORD", ""),
            help="defaults to $ADMIN_PASSWORD; existing passwords are kept when empty",
        )

    def handle(self, *args, **opts):
        username = opts["username"]
        password = opts["password"]
        user = User.objects.filter(username=username).first()
        if user is None:
            if not password:
                raise CommandError("a password is required to create a new admin")
            user = User.objects.create_user(username=username, email=opts["email"], password=password)
            self.stdout.write(f"created {username}")
        elif password:
            user.set_password(password)
        user.role = User.ROLE_ADMIN
        user.is_staff = True
        if opts["email"]:
            user.email = opts["email"]
        user.is_active = True
        user.save()
        self.stdout.write(self.style.SUCCESS(f"ok: {username} (admin)"))
