#!/usr/bin/env python3
"""
Standalone script to fill the most recently registered account with sample data
Usage: python seed_data.py [count]
"""

import asyncio
import random
import sys
from datetime import timedelta

from money_manager.core.config import settings
from money_manager.core.database import Database
from money_manager.core.auth import User  # noqa: F401  (registers all mappers)
from money_manager.crud.transaction import create_transaction_for_user
from money_manager.crud.user import get_latest_user
from money_manager.schemas.transaction import TransactionCreate
from money_manager.utils.periods import local_now

SAMPLE_TRANSACTIONS = [
    # Income
    {"type": "income", "category": "Salary", "description": "Monthly Salary", "amount": 5000, "division": "office"},
    {"type": "income", "category": "Freelance", "description": "Website Project", "amount": 1200, "division": "personal"},
    {"type": "income", "category": "Investment", "description": "Stock Dividend", "amount": 300, "division": "personal"},

    # Expenses
    {"type": "expense", "category": "Food", "description": "Lunch at Cafe", "amount": 25, "division": "personal"},
    {"type": "expense", "category": "Food", "description": "Grocery Shopping", "amount": 150, "division": "personal"},
    {"type": "expense", "category": "Transport", "description": "Uber Ride", "amount": 18, "division": "personal"},
    {"type": "expense", "category": "Transport", "description": "Fuel Refill", "amount": 45, "division": "office"},
    {"type": "expense", "category": "Bills", "description": "Electricity Bill", "amount": 120, "division": "personal"},
    {"type": "expense", "category": "Bills", "description": "Internet Subscription", "amount": 60, "division": "office"},
    {"type": "expense", "category": "Entertainment", "description": "Movie Night", "amount": 40, "division": "personal"},
    {"type": "expense", "category": "Shopping", "description": "New Headphones", "amount": 200, "division": "personal"},
    {"type": "expense", "category": "Medical", "description": "Pharmacy", "amount": 35, "division": "personal"},
    {"type": "expense", "category": "Food", "description": "Dinner with Client", "amount": 85, "division": "office"},
]

DAYS_BACK = 45


async def seed_data(count: int = 50):
    print("🔌 Connecting to database...")
    db = Database(settings.DATABASE_URL).connect()

    try:
        async with db.session() as session:
            user = await get_latest_user(session)
            if user is None:
                print("❌ No users found! Please register a user in the app first.")
                return

            print(f"👤 Seeding for user: {user.email}")
            print(f"🌱 Generating {count} sample transactions...")

            end = local_now()
            window = timedelta(days=DAYS_BACK).total_seconds()
            for _ in range(count):
                template = random.choice(SAMPLE_TRANSACTIONS)
                tx_in = TransactionCreate(
                    **{**template, "amount": template["amount"] + random.randint(0, 49)},
                    date=end - timedelta(seconds=random.uniform(0, window)),
                    account="default",
                )
                await create_transaction_for_user(user.id, tx_in, session)

            print(f"✅ Added {count} transactions to {user.email}")
    finally:
        await db.dispose()


if __name__ == "__main__":
    asyncio.run(seed_data(int(sys.argv[1]) if len(sys.argv) > 1 else 50))
