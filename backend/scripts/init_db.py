"""
Initialize the database: create all tables and seed the FAQ.
Run with: python -m scripts.init_db
"""

import asyncio
from sqlalchemy import select
from homecare.database import engine, Base, async_session
from homecare.models import FAQ

DEFAULT_FAQS = [
    ("How do I book a nurse?",
     "Register your patients, pick a nurse from the directory and create a service request."),
    ("When is the nurse paid?",
     "You pay once the nurse accepts. The payment is held and released to the nurse when the service is completed."),
    ("Can I cancel a request?",
     "A request that the nurse has not accepted yet can be rejected by the nurse; contact support for anything else."),
]


async def init():
    print("Creating database tables...")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as session:
        existing = await session.scalar(select(FAQ.id).limit(1))
        if existing is None:
            session.add_all(FAQ(question=q, answer=a) for q, a in DEFAULT_FAQS)
            await session.commit()
            print(f"Seeded {len(DEFAULT_FAQS)} FAQ entries.")
    print("All tables created successfully.")
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(init())
