# jobportal/services/seed.py
"""
First-run data for a fresh store: the three-tier category taxonomy, a few
sample companies and the demo accounts. Safe to run repeatedly.
"""
import logging
from typing import Dict, List, Optional, Tuple

from jobportal.services.accounts import mark_verified, register_user
from jobportal.services.database_service import DatabaseService

logger = logging.getLogger(__name__)

# (name, description, parent name)
DEFAULT_CATEGORIES: Dict[int, List[Tuple[str, str, Optional[str]]]] = {
    1: [
        ("Information Technology", "Software, Hardware, and IT Services", None),
        ("Finance & Banking", "Banking, Insurance, and Financial Services", None),
        ("Healthcare & Medical", "Medical, Pharmaceutical, and Healthcare Services", None),
        ("Education & Training", "Teaching, Training, and Educational Services", None),
        ("Engineering", "Civil, Mechanical, Electrical, and Other Engineering", None),
    ],
    2: [
        ("Software Development", "Web, Mobile, and Desktop Application Development", "Information Technology"),
        ("Data Science & Analytics", "Data Analysis, Machine Learning, and AI", "Information Technology"),
        ("Cybersecurity", "Information Security and Risk Management", "Information Technology"),
        ("Commercial Banking", "Retail and Corporate Banking Services", "Finance & Banking"),
        ("Investment Banking", "Investment and Advisory Services", "Finance & Banking"),
    ],
    3: [
        ("Frontend Developer", "UI/UX Development with React, Angular, Vue", "Software Development"),
        ("Backend Developer", "Server-side Development and APIs", "Software Development"),
        ("Full Stack Developer", "End-to-end Web Development", "Software Development"),
        ("Mobile App Developer", "iOS and Android Development", "Software Development"),
        ("DevOps Engineer", "Infrastructure and Deployment Automation", "Software Development"),
    ],
}

SAMPLE_COMPANIES = [
    {
        "name": "TechVision Nepal",
        "description": "Software development company specializing in web and mobile applications",
        "website": "https://techvision.com.np",
        "location": "Kathmandu, Nepal",
        "industry": "Information Technology",
        "size": "50-100 employees",
        "founded_year": 2018,
        "is_featured": True,
        "is_top_hiring": True,
        "is_trusted": True,
    },
    {
        "name": "Himalayan Bank Ltd",
        "description": "Commercial bank offering retail and corporate financial services",
        "website": "https://himalayanbank.com",
        "location": "Kathmandu, Nepal",
        "industry": "Banking & Finance",
        "size": "500+ employees",
        "founded_year": 1993,
        "is_featured": True,
        "is_top_hiring": False,
        "is_trusted": True,
    },
    {
        "name": "Green Energy Nepal",
        "description": "Renewable energy solutions and consulting",
        "location": "Lalitpur, Nepal",
        "industry": "Energy & Environment",
        "size": "10-20 employees",
        "founded_year": 2019,
        "is_featured": False,
        "is_top_hiring": False,
        "is_trusted": True,
    },
]

DEMO_ACCOUNTS = [
    {"email": "admin.demo@megajobnepal.com", "password": "admin123",
     "full_name": "Demo Administrator", "user_type": "admin", "phone_number": "+977-1-4441234"},
    {"email": "jobseeker.demo@megajobnepal.com", "password": "jobseeker123",
     "full_name": "Demo Job Seeker", "user_type": "job_seeker", "phone_number": "+977-98-12345678"},
    {"email": "employer.demo@megajobnepal.com", "password": "employer123",
     "full_name": "Demo Employer", "user_type": "employer", "phone_number": "+977-98-87654321"},
]


async def seed_categories(service: DatabaseService) -> int:
    # bypass the cached list: seeding must see the real contents
    if await service.categories.find({}, limit=1):
        return 0
    ids_by_name: Dict[str, str] = {}
    created = 0
    for tier in sorted(DEFAULT_CATEGORIES):
        for name, description, parent in DEFAULT_CATEGORIES[tier]:
            cat = await service.create_job_category(
                {"name": name, "description": description, "tier": tier, "parent_id": ids_by_name.get(parent)}
            )
            ids_by_name[name] = cat.id
            created += 1
    return created


async def seed_companies(service: DatabaseService) -> int:
    created = 0
    for company in SAMPLE_COMPANIES:
        if await service.get_companies({"name": company["name"]}):
            continue
        await service.create_company(company)
        created += 1
    return created


async def seed_demo_accounts(service: DatabaseService) -> int:
    created = 0
    for account in DEMO_ACCOUNTS:
        existing = await service.get_user_by_email(account["email"])
        if existing is None:
            existing = await register_user(service, **account)
            created += 1
        # demo accounts skip OTP and always carry the intended role
        await mark_verified(service, existing.id, user_type=account["user_type"])
    return created


async def seed_default_data(service: DatabaseService) -> Dict[str, int]:
    await service.setup_database()
    summary = {
        "job_categories": await seed_categories(service),
        "companies": await seed_companies(service),
        "users": await seed_demo_accounts(service),
    }
    logger.info("Seeded default data: %s", summary)
    return summary
