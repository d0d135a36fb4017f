"""
Database Seed Script
Creates demo providers and their services for ServiceHub

Run with: python -m scripts.seed
"""

import asyncio
import random
from motor.motor_asyncio import AsyncIOMotorClient

from app.config import get_settings
from app.models.provider import Provider, WEEKDAY_NAMES
from app.models.service import Service

# Demo data constants
COMPANIES = [
    ("Sparkle Home Cleaning", "Cleaning"),
    ("FixIt Plumbing Co", "Plumbing"),
    ("Bright Spark Electrical", "Electrical"),
    ("Green Thumb Gardens", "Landscaping"),
    ("CoolBreeze Aircon", "Aircon Repair"),
]

SERVICES_BY_TYPE = {
    "Cleaning": [
        ("Standard Cleaning", "General cleaning of living areas and kitchen", 2, 800),
        ("Deep Cleaning", "Top to bottom cleaning including appliances", 5, 2500),
        ("Move-out Cleaning", "Full clean for handover of a rented unit", 6, 3000),
    ],
    "Plumbing": [
        ("Leak Repair", "Find and fix leaking pipes and faucets", 1.5, 900),
        ("Drain Unclogging", "Clear blocked sinks, showers and toilets", 1, 700),
        ("Water Heater Install", "Supply-side installation of a water heater", 3, 2200),
    ],
    "Electrical": [
        ("Outlet Installation", "Install or replace wall outlets", 1, 600),
        ("Wiring Inspection", "Safety inspection of household wiring", 2, 1500),
    ],
    "Landscaping": [
        ("Lawn Mowing", "Mowing, edging and clean-up", 1.5, 750),
        ("Garden Makeover", "Planting, mulching and layout refresh", 8, 6000),
    ],
    "Aircon Repair": [
        ("Aircon Cleaning", "Filter and coil cleaning for split-type units", 1.5, 1200),
        ("Freon Recharge", "Refrigerant top-up with leak check", 1, 1800),
    ],
}

BIOS = [
    "Family-run business serving the neighborhood for years.",
    "Licensed and insured team with fast response times.",
    "We treat every home like our own.",
]


def build_provider(index: int, company_name: str, type_of_provider: str) -> Provider:
    """Create a demo provider document"""
    start = random.randint(0, 2)
    return Provider(
        user_id=f"user_demo{index + 1}",
        company_name=company_name,
        type_of_provider=type_of_provider,
        phone_number=f"+63 917 555 {1000 + index:04d}",
        experience_years=random.randint(1, 20),
        hourly_rate=random.choice([300, 450, 500, 650, 800]),
        bio=random.choice(BIOS),
        operating_days=WEEKDAY_NAMES[start:start + 5],
        start_time="08:00",
        end_time="17:00",
    )


def build_services(provider: Provider) -> list[Service]:
    """Create demo services and link them to the provider"""
    services = []
    for name, description, duration, price in SERVICES_BY_TYPE.get(provider.type_of_provider, []):
        service = Service(
            provider_id=provider.provider_id,
            image_url=f"https://picsum.photos/seed/{provider.provider_id}-{len(services)}/640/480",
            service_name=name,
            type_of_service=provider.type_of_provider,
            description=description,
            duration=duration,
            price=round(price * random.uniform(0.9, 1.15), 2),
        )
        services.append(service)
        provider.services_offered.append(service.service_id)
    return services


async def seed_database():
    """Main seed function"""
    settings = get_settings()
    print("🌱 Starting database seed...")

    client = AsyncIOMotorClient(settings.MONGO_URL)
    db = client[settings.DB_NAME]

    # Clear existing data
    print("  Clearing existing data...")
    for collection in ["providers", "services"]:
        await db[collection].delete_many({})

    print("  Creating providers and services...")
    providers = []
    services = []
    for i, (company_name, type_of_provider) in enumerate(COMPANIES):
        provider = build_provider(i, company_name, type_of_provider)
        services.extend(build_services(provider))
        providers.append(provider)

    await db.providers.insert_many([p.to_document() for p in providers])
    if services:
        await db.services.insert_many([s.to_document() for s in services])

    print("\n✅ Seed complete!")
    print(f"   - {len(providers)} providers")
    print(f"   - {len(services)} services")

    print("\n👤 Demo provider accounts:")
    for provider in providers:
        print(f"   {provider.user_id} - {provider.company_name}")

    client.close()


if __name__ == "__main__":
    asyncio.run(seed_database())
