from django.core.management.base import BaseCommand
from django.contrib.auth.hashers import make_password

from accounts.models import CustomUser, UserRole


class Command(BaseCommand):
    help = 'Create development users for each pricing role'

    def handle(self, *args, **options):
        users_data = [
            {'username': 'admin_user', 'password': 'admin_password', 'role': UserRole.ADMIN},
            {'username': 'ops_user', 'password': 'ops_password', 'role': UserRole.INTERNAL_STAFF},
            {'username': 'customer_user', 'password': 'customer_password', 'role': UserRole.CUSTOMER},
        ]

        for user_data in users_data:
            if CustomUser.objects.filter(username=user_data['username']).exists():
                self.stdout.write(
                    self.style.WARNING(f"User {user_data['username']} already exists")
                )
                continue

            user = CustomUser.objects.create(
                username=user_data['username'],
                password=make_password(user_data['password']),
                role=user_data['role'],
                is_staff=user_data['role'] == UserRole.ADMIN,
            )

            self.stdout.write(
                self.style.SUCCESS(f"Successfully created {user_data['role']} user: {user.username}")
            )

        self.stdout.write(self.style.SUCCESS("All test users created successfully!"))
