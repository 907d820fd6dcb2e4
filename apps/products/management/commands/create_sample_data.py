"""
Management command to create sample data for trying the API.

Usage:
    python manage.py create_sample_data

This creates:
- 5 users (admin, designer, manufacturer, two investors)
- Wallets with starting credit for the investors
- 2 products, one funding and one still a draft
- Investments placed through process_investment
"""

from django.core.management.base import BaseCommand
from django.db import transaction
from decimal import Decimal

from apps.accounts.models import User, UserRole
from apps.notifications.models import Notification
from apps.products.models import Investment, Product, ProductStatus
from apps.products.services import process_investment
from apps.revenue.models import RevenueDistribution
from apps.wallets.models import Wallet, WalletTransaction

SAMPLE_EMAILS = [
    'admin@example.com',
    'dana@example.com',
    'max@example.com',
    'ivy@example.com',
    'otto@example.com',
]

INVESTOR_STARTING_BALANCE = Decimal('2000.00')


class Command(BaseCommand):
    help = 'Create sample data for testing the API'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Clear existing sample data before creating new sample data',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Clearing existing data...')
            self.clear_data()

        self.stdout.write('Creating sample data...')

        users = self.create_users()
        self.create_wallets(users)
        products = self.create_products(users['dana'])
        self.create_investments(users, products)

        self.stdout.write(self.style.SUCCESS('Sample data created successfully!'))
        self.stdout.write('')
        self.stdout.write('Test accounts:')
        self.stdout.write('  admin@example.com / admin123 (superuser)')
        self.stdout.write('  dana@example.com / password123 (designer)')
        self.stdout.write('  max@example.com / password123 (manufacturer)')
        self.stdout.write('  ivy@example.com / password123 (investor)')
        self.stdout.write('  otto@example.com / password123 (investor)')
        self.stdout.write('')
        self.stdout.write(f"Report a sale of '{products['lamp'].name}' with productId {products['lamp'].id}")

    def clear_data(self):
        """Delete rows owned by the sample users."""
        users = User.objects.filter(email__in=SAMPLE_EMAILS)
        products = Product.objects.filter(designer__in=users)

        RevenueDistribution.objects.filter(product__in=products).delete()
        Notification.objects.filter(user__in=users).delete()
        WalletTransaction.objects.filter(user__in=users).delete()
        Investment.objects.filter(product__in=products).delete()
        products.delete()
        Wallet.objects.filter(user__in=users).delete()
        users.delete()

    def create_users(self):
        self.stdout.write('  Creating users...')

        admin, _ = User.objects.get_or_create(
            email='admin@example.com',
            defaults={
                'display_name': 'Admin User',
                'is_staff': True,
                'is_superuser': True,
            }
        )
        admin.set_password('admin123')
        admin.save()

        users = {'admin': admin}
        for key, display_name, roles in [
            ('dana', 'Dana Designer', [UserRole.CUSTOMER, UserRole.DESIGNER]),
            ('max', 'Max Maker', [UserRole.MANUFACTURER]),
            ('ivy', 'Ivy Investor', [UserRole.CUSTOMER, UserRole.INVESTOR]),
            ('otto', 'Otto Owner', [UserRole.INVESTOR]),
        ]:
            user, _ = User.objects.get_or_create(
                email=f'{key}@example.com',
                defaults={
                    'display_name': display_name,
                    'roles': [role.value for role in roles],
                }
            )
            user.set_password('password123')
            user.save()
            users[key] = user

        return users

    def create_wallets(self, users):
        self.stdout.write('  Creating wallets...')

        for key in ('ivy', 'otto'):
            Wallet.objects.get_or_create(
                user=users[key],
                defaults={'balance_usd': INVESTOR_STARTING_BALANCE},
            )

    def create_products(self, designer):
        self.stdout.write('  Creating products...')

        lamp, _ = Product.objects.get_or_create(
            name='Desk Lamp',
            designer=designer,
            defaults={
                'status': ProductStatus.FUNDING,
                'funding_goal_usd': Decimal('5000.00'),
            }
        )
        chair, _ = Product.objects.get_or_create(
            name='Prototype Chair',
            designer=designer,
            defaults={'status': ProductStatus.DRAFT},
        )
        return {'lamp': lamp, 'chair': chair}

    def create_investments(self, users, products):
        """Invest 60/40 in the lamp so the split is easy to check."""
        self.stdout.write('  Creating investments...')

        lamp = products['lamp']
        if lamp.investments.exists():
            self.stdout.write('    Lamp already funded, skipping')
            return

        for key, amount in (('ivy', Decimal('600.00')), ('otto', Decimal('400.00'))):
            process_investment(user=users[key], product_id=lamp.id, amount=amount)
