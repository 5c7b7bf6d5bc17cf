"""
Seed data for local development.

Creates a couple of demo accounts with a few DIYs, comments and likes so
the API and the search client have something to return.
"""

from __future__ import annotations

from typing import Any
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..auth.passwords import hash_password
from ..dbmodels import Comments, Diys, Likes, Users
from ..logging import get_logger

logger = get_logger(__name__)

DEMO_PASSWORD = "password123"

DEMO_USERS = [
    {"username": "maker_mia", "email": "mia@example.com"},
    {"username": "woodshop_will", "email": "will@example.com"},
]

DEMO_DIYS: list[dict[str, Any]] = [
    {
        "author": "maker_mia",
        "title": "Mason Jar Herb Garden",
        "description": "A windowsill herb garden built from reclaimed mason jars.",
        "materials_used": ["mason jars", "pebbles", "potting soil", "herb seedlings"],
        "instructions": "Layer pebbles for drainage, add soil, plant the seedlings and water lightly.",
        "images": [],
    },
    {
        "author": "woodshop_will",
        "title": "Pallet Coffee Table",
        "description": "A rustic coffee table made from two shipping pallets.",
        "materials_used": ["pallets", "sandpaper", "wood stain", "caster wheels"],
        "instructions": "Sand the pallets, stack and screw them together, stain, then fit the casters.",
        "images": [],
    },
    {
        "author": "woodshop_will",
        "title": "Floating Wall Shelf",
        "description": "Hidden-bracket shelf for a small garden shed or kitchen.",
        "materials_used": ["oak board", "steel rods", "drill"],
        "instructions": "Drill the board end grain, mount the rods in the wall studs and slide the board on.",
        "images": [],
    },
]


async def ensure_user(db: AsyncSession, *, username: str, email: str) -> UUID:
    """Create a demo user unless one with this username already exists."""
    result = await db.execute(select(Users).where(Users.username == username))
    existing = result.scalar_one_or_none()
    if existing:
        logger.debug("User already exists", user_id=str(existing.id), username=username)
        return existing.id

    user = Users(username=username, email=email, password_hash=hash_password(DEMO_PASSWORD))
    db.add(user)
    await db.flush()

    logger.info("Created demo user", user_id=str(user.id), username=username)
    return user.id


async def seed_initial_data(db: AsyncSession) -> int:
    """
    Seed demo users, DIYs, a comment and a like. Returns how many DIYs were created.

    Safe to run repeatedly; DIYs are only created for users that have none.
    """
    logger.info("Starting database seeding")

    user_ids = {}
    for user in DEMO_USERS:
        user_ids[user["username"]] = await ensure_user(db, **user)

    result = await db.execute(select(Diys.user_id).distinct())
    authors_with_diys = set(result.scalars().all())

    created = []
    for entry in DEMO_DIYS:
        author_id = user_ids[entry["author"]]
        if author_id in authors_with_diys:
            continue
        fields = {key: value for key, value in entry.items() if key != "author"}
        diy = Diys(user_id=author_id, **fields)
        db.add(diy)
        created.append(diy)

    await db.flush()

    if created:
        first = created[0]
        commenter = next(uid for uid in user_ids.values() if uid != first.user_id)
        db.add(Comments(content="Great idea, trying this weekend!", user_id=commenter, diy_id=first.id))
        db.add(Likes(user_id=commenter, diy_id=first.id))

    await db.commit()
    logger.info("Database seeding completed", diys_created=len(created))
    return len(created)
