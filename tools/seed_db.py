"""
Seed demo mentors and mentees.

Every account shares the password `password123`. Accounts whose email already
exists are left untouched, so the script can be re-run safely.

Usage (from the repository root):
    DATABASE_URL=postgresql+asyncpg://... python -m tools.seed_db
"""

import asyncio
from mentorlink.authentication.authentication_service import AuthenticationService
from mentorlink.common.database import Database
from mentorlink.common.logger import get_logger
from mentorlink.common.user_role import UserRole
from mentorlink.entity.mentee_profile_entity import MenteeProfileEntity
from mentorlink.entity.mentor_profile_entity import MentorProfileEntity
from mentorlink.entity.users_entity import UsersEntity
from mentorlink.repository.mentee_profiles_repository import MenteeProfilesRepository
from mentorlink.repository.mentor_profiles_repository import MentorProfilesRepository
from mentorlink.repository.users_repository import UsersRepository

logger = get_logger()

SEED_PASSWORD = "password123"

# Seeded mentors keep the legacy capacity 0; the first acceptance migrates it.
MENTORS = [
    {
        "email": "dr.perera@uom.lk",
        "name": "Dr. Ajith Perera",
        "bio": "Senior Lecturer at ENTC. Specialized in Signal Processing and Machine Learning. I enjoy helping students navigate their academic careers.",
        "expertise": ["Signal Processing", "Machine Learning", "AI", "Embedded Systems"],
        "organization": "University of Moratuwa",
        "graduation_year": 2005,
    },
    {
        "email": "sarah.fernando@google.com",
        "name": "Sarah Fernando",
        "bio": "Software Engineer at Google. ENTC Alumni (Batch 16). Passionate about cloud computing and distributed systems.",
        "expertise": ["Cloud Computing", "Software Engineering", "Distributed Systems", "Go"],
        "organization": "Google",
        "graduation_year": 2018,
    },
    {
        "email": "nuwan.j@wso2.com",
        "name": "Nuwan Jayasinghe",
        "bio": "Associate Tech Lead at WSO2. I can help with open source contribution and middleware technologies.",
        "expertise": ["Middleware", "Open Source", "Java", "Microservices"],
        "organization": "WSO2",
        "graduation_year": 2017,
    },
    {
        "email": "dilshan.r@dialog.lk",
        "name": "Dilshan Rajapaksa",
        "bio": "Telecommunications Engineer at Dialog Axiata. Expert in 5G networks and IoT.",
        "expertise": ["Telecommunications", "5G", "IoT", "Networking"],
        "organization": "Dialog Axiata",
        "graduation_year": 2016,
    },
    {
        "email": "kavindi.s@mit.edu",
        "name": "Kavindi Silva",
        "bio": "PhD Candidate at MIT. Researching computer vision and robotics. Happy to advise on grad school applications.",
        "expertise": ["Computer Vision", "Robotics", "Research", "Academic Writing"],
        "organization": "MIT",
        "graduation_year": 2019,
    },
]

MENTEES = [
    {"email": "student1@uom.lk", "name": "Kasun De Silva", "interests": ["AI", "Robotics"]},
    {
        "email": "student2@uom.lk",
        "name": "Amaya Perera",
        "interests": ["Software Engineering", "Cloud"],
    },
]


async def _create_user(session, users_repository, data, role, password_hash):
    existing = await users_repository.get_user_by_primary_email(session, data["email"])
    if existing:
        logger.info("Skipping existing %s: %s", role.value, data["email"])
        return None

    return await users_repository.upsert_users(
        session,
        UsersEntity(
            name=data["name"],
            primary_email=data["email"],
            password_hash=password_hash,
            role=role,
            is_active=True,
        ),
    )


async def seed_database(database: Database | None = None) -> dict:
    """
    Insert the demo accounts with their profiles.

    Returns:
        dict: Number of created mentors and mentees.
    """
    db = database or Database(echo=False)
    users_repository = UsersRepository()
    mentor_profiles_repository = MentorProfilesRepository()
    mentee_profiles_repository = MenteeProfilesRepository()
    password_hash = AuthenticationService.hash_password(SEED_PASSWORD)
    created = {"mentors": 0, "mentees": 0}

    async with db.session() as session:
        for data in MENTORS:
            user = await _create_user(
                session, users_repository, data, UserRole.MENTOR, password_hash
            )
            if not user:
                continue
            await mentor_profiles_repository.upsert_mentor_profile(
                session,
                MentorProfileEntity(
                    user_id=user.user_id,
                    bio=data["bio"],
                    expertise=data["expertise"],
                    organization=data["organization"],
                    graduation_year=data["graduation_year"],
                ),
            )
            created["mentors"] += 1
            logger.info("Created mentor: %s", user.name)

        for data in MENTEES:
            user = await _create_user(
                session, users_repository, data, UserRole.MENTEE, password_hash
            )
            if not user:
                continue
            await mentee_profiles_repository.upsert_mentee_profile(
                session,
                MenteeProfileEntity(user_id=user.user_id, interests=data["interests"]),
            )
            created["mentees"] += 1
            logger.info("Created mentee: %s", user.name)

        await session.commit()

    logger.info("Seeding finished: %s", created)
    return created


def main():
    asyncio.run(seed_database())


if __name__ == "__main__":
    main()
