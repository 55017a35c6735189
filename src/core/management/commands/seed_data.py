"""Seed database with a demo agency for development."""
from datetime import timedelta
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone


class Command(BaseCommand):
    help = "Seed database with a demo organization, users, people, rates, targets and sales"

    ORG_CODE = "DEMO"

    DEMO_USERS = [
        {"email": "owner@agency.test", "first_name": "Olivia", "last_name": "Owner", "role": "OWNER", "password": "owner123!"},
        {"email": "manager@agency.test", "first_name": "Marc", "last_name": "Manager", "role": "MANAGER", "password": "manager123!"},
    ]

    DEMO_PEOPLE = [
        ("Alice Agent", "Account Manager", Decimal("3000")),
        ("Bob Broker", "Account Manager", Decimal("2800")),
        ("Carla Closer", "Sales Producer", Decimal("2500")),
    ]

    DEMO_LOBS = [("Auto", "PC"), ("Fire", "PC"), ("Life", "FS"), ("Health", "FS"), ("IPS", "IPS")]

    DEMO_RATES = {"Auto": "0.08", "Fire": "0.10", "Life": "0.50", "Health": "0.20", "IPS": "0.02"}

    def add_arguments(self, parser):
        parser.add_argument("--flush", action="store_true", help="Delete the demo organization first")
        parser.add_argument("--months", type=int, default=3, help="Months of sales history to generate")

    @transaction.atomic
    def handle(self, *args, **options):
        if options["flush"]:
            self.stdout.write("Flushing demo organization...")
            self._flush()

        self.stdout.write("Seeding data...")
        organization = self._create_organization()
        users = self._create_users(organization)
        lobs = self._create_lobs(organization)
        people = self._create_people(organization)
        self._create_rates(organization)
        self._create_expectations(organization, lobs)
        sales = self._create_sales(organization, people, lobs, months=max(options["months"], 1))

        self.stdout.write(self.style.SUCCESS(
            f"Seed complete: 1 organization, {len(users)} users, {len(people)} people, "
            f"{len(lobs)} lines of business, {sales} sales"
        ))

    def _flush(self):
        from accounts.models import User
        from agencies.models import Organization

        Organization.objects.filter(code=self.ORG_CODE).delete()
        User.objects.filter(email__in=[u["email"] for u in self.DEMO_USERS]).delete()

    def _create_organization(self):
        from agencies.models import Organization

        organization, created = Organization.objects.get_or_create(
            code=self.ORG_CODE,
            defaults={"name": "Demo Insurance Agency"},
        )
        if created:
            self.stdout.write(f"  Created organization: {organization.name}")
        return organization

    def _create_users(self, organization):
        from accounts.models import User
        from agencies.models import OrgMembership

        users = []
        for data in self.DEMO_USERS:
            user = User.objects.filter(email=data["email"]).first()
            if user is None:
                user = User.objects.create_user(
                    email=data["email"],
                    password=data["password"],
                    first_name=data["first_name"],
                    last_name=data["last_name"],
                )
                self.stdout.write(f"  Created user: {user.email} ({data['role']})")
            OrgMembership.objects.get_or_create(
                organization=organization,
                user=user,
                defaults={"role": data["role"], "is_default": True},
            )
            users.append(user)
        return users

    def _create_lobs(self, organization):
        from agencies.models import LineOfBusiness

        return {
            name: LineOfBusiness.objects.get_or_create(
                organization=organization,
                name=name,
                defaults={"premium_category": category},
            )[0]
            for name, category in self.DEMO_LOBS
        }

    def _create_people(self, organization):
        from agencies.models import OrgRole, Person
        from roi.models import CompensationPlan

        start = timezone.localdate().replace(month=1, day=1)
        people = []
        for full_name, role_name, salary in self.DEMO_PEOPLE:
            role, _ = OrgRole.objects.get_or_create(organization=organization, name=role_name)
            person, created = Person.objects.get_or_create(
                organization=organization,
                full_name=full_name,
                defaults={"role": role},
            )
            if created:
                CompensationPlan.objects.create(
                    organization=organization,
                    person=person,
                    monthly_salary=salary,
                    effective_start=start,
                    label="Base salary",
                )
            people.append(person)
        return people

    def _create_rates(self, organization):
        from roi.models import CommissionRate

        start = timezone.localdate().replace(year=timezone.localdate().year - 1, month=1, day=1)
        for lob, rate in self.DEMO_RATES.items():
            CommissionRate.objects.get_or_create(
                organization=organization,
                lob=lob,
                effective_start=start,
                defaults={"rate": Decimal(rate)},
            )

    def _create_expectations(self, organization, lobs):
        from agencies.models import OrgRole
        from benchmarks.models import RoleExpectation

        for role in OrgRole.objects.filter(organization=organization):
            RoleExpectation.objects.get_or_create(
                role=role,
                defaults={
                    "app_goals_by_lob": {str(lobs["Auto"].pk): 20, str(lobs["Fire"].pk): 10, str(lobs["Life"].pk): 4},
                    "premium_by_bucket": {"PC": 25000, "FS": 8000, "IPS": 2000},
                },
            )

    def _create_sales(self, organization, people, lobs, months):
        from production.models import PolicyStatus, SaleEvent

        if SaleEvent.objects.filter(organization=organization).exists():
            return 0

        today = timezone.localdate()
        lob_cycle = [lobs["Auto"], lobs["Auto"], lobs["Fire"], lobs["Life"], lobs["Health"]]
        statuses = [PolicyStatus.WRITTEN, PolicyStatus.ISSUED, PolicyStatus.PAID, PolicyStatus.PAID, PolicyStatus.CANCELLED]
        events = []
        for day in range(months * 30):
            sold_on = today - timedelta(days=day)
            for index, person in enumerate(people):
                if (day + index) % 2:
                    continue
                lob = lob_cycle[(day + index) % len(lob_cycle)]
                events.append(SaleEvent(
                    organization=organization,
                    person=person,
                    line_of_business=lob,
                    lob_name=lob.name,
                    premium=Decimal(800 + 150 * ((day * 7 + index) % 9)),
                    date_sold=sold_on,
                    status=statuses[(day + 2 * index) % len(statuses)],
                ))
        SaleEvent.objects.bulk_create(events)
        return len(events)
