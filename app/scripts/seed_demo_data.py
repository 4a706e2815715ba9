"""
Demo data seeding script for the task tracker.

Creates (or reuses) a demo account and fills it with Faker-generated tasks
spread over past and future due dates, so the dashboard has overdue,
upcoming and undated work to sort and paginate.

    python -m app.scripts.seed_demo_data --count 30
"""
import argparse
import asyncio
import logging
import random
from datetime import date, timedelta

from faker import Faker

from app.database import db_state, init_db
from app.log import setup_logging
from app.models.tasks import Priority, Status, Task
from app.schemas.user import UserCreate
from app.services import users as user_service

logger = logging.getLogger(__name__)

fake = Faker()

DEMO_NAME = "Demo User"
DEMO_EMAIL = "demo@example.com"
DEMO_PASSWORD = "demo-password"


def fake_task(user_id: int, today: date) -> Task:
    due_date = None
    if random.random() < 0.8:
        due_date = today + timedelta(days=random.randint(-20, 40))

    description = fake.paragraph(nb_sentences=2)[:500] if random.random() < 0.7 else None
    return Task(
        user_id=user_id,
        title=fake.sentence(nb_words=5).rstrip(".")[:100],
        description=description,
        priority=random.choice(list(Priority)).value,
        status=random.choices(list(Status), weights=[5, 3, 2])[0].value,
        due_date=due_date,
    )


async def seed(count: int) -> None:
    await init_db()
    async with db_state.session_factory()() as db:
        user = await user_service.get_user_by_email(db, DEMO_EMAIL)
        if user is None:
            user = await user_service.register_user(
                db, UserCreate(name=DEMO_NAME, email=DEMO_EMAIL, password=DEMO_PASSWORD)
            )
            logger.info("Created demo user %s", DEMO_EMAIL)

        today = date.today()
        db.add_all(fake_task(user.user_id, today) for _ in range(count))
        await db.commit()
        logger.info("Seeded %d tasks for %s (password: %s)", count, DEMO_EMAIL, DEMO_PASSWORD)

    await db_state.dispose()


def main():
    parser = argparse.ArgumentParser(description="Seed demo tasks")
    parser.add_argument("--count", type=int, default=25, help="number of tasks to create")
    args = parser.parse_args()

    setup_logging()
    asyncio.run(seed(args.count))


if __name__ == "__main__":
    main()
