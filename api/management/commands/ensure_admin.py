# api/management/commands/ensure_admin.py
import os

from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError
from django.core.management.base import BaseCommand, CommandError

from api.models import Account


class Command(BaseCommand):
    help = "Create or update an administrator account (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument("--email", default=os.getenv("ADMIN_EMAIL"))
        parser.add_argument("--password", default=os.getenv("ADMIN_PASSWORD"))
        parser.add_argument("--name", default=os.getenv("ADMIN_NAME", "Administrator"))
        parser.add_argument("--phone", default=os.getenv("ADMIN_PHONE", ""))

    def handle(self, *args, **opts):
        email = (opts["email"] or "").lower().strip()
        password = opts["password"]
        if not email or not password:
            raise CommandError("--email and --password (or ADMIN_EMAIL / ADMIN_PASSWORD) are required")
        try:
            validate_password(password)
        except ValidationError as e:
            raise CommandError("; ".join(e.messages))

        account = Account.objects.filter(email=email, role=Account.ROLE_ADMIN, deleted_at__isnull=True).first()
        created = account is None
        if created:
            account = Account(username=Account.generate_username(), email=email, role=Account.ROLE_ADMIN)
        account.name = opts["name"]
        account.phone = opts["phone"]
        account.is_active = True
        account.is_staff = True
        account.set_password(password)
        account.save()
        verb = "created" if created else "updated"
        self.stdout.write(self.style.SUCCESS(f"ok: admin {email} {verb} (id={account.id})"))
