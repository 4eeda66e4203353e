#!/usr/bin/env python3
"""
Database initialization script.

Creates all tables and seeds a demo user for development.
Run this script to initialize a fresh database; use Alembic for
existing deployments.
"""

import sys
import os

# Add the parent directory to the path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from uuid import UUID

from db.base import Base
from db.session import engine, SessionLocal

# Import all models to register them with Base.metadata
from db.models import User


# Demo user id sent as X-User-Id by local clients
DEMO_USER_ID = UUID('00000000-0000-0000-0000-000000000001')


def create_tables():
    """Create all database tables."""
    print("Creating database tables...")
    Base.metadata.create_all(bind=engine)
    print("✓ Tables created successfully")


def seed_demo_user():
    """Insert the demo user if not exists."""
    db = SessionLocal()
    try:
        existing_user = db.get(User, DEMO_USER_ID)

        if existing_user:
            print(f"✓ Demo user already exists: {existing_user.username}")
            return

        demo_user = User(
            id=DEMO_USER_ID,
            username='demo',
            email='demo@videoshare.dev',
            full_name='Demo Channel',
        )
        db.add(demo_user)
        db.commit()
        print(f"✓ Demo user created: {demo_user.username}")

    except Exception as e:
        db.rollback()
        print(f"✗ Failed to seed demo user: {e}")
        raise
    finally:
        db.close()


def main():
    """Initialize the database with all tables and seed data."""
    print("=" * 50)
    print("Database Initialization")
    print("=" * 50)

    try:
        create_tables()
        seed_demo_user()
        print("=" * 50)
        print("✓ Database initialized successfully!")
        print("=" * 50)
    except Exception as e:
        print(f"✗ Database initialization failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
