#!/usr/bin/env python3
"""
Database Seed Script
Populate sample data into the database

Features:
1. Create Users - one demo account for the client and assistant
2. Create Events - a handful of upcoming campus events

Notes:
- Run `python -m script.reset_database` first
- Events are dated relative to now so they are always in the future
"""

import asyncio
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from pydantic import SecretStr

from src.platform.database.orm_db_setting import Database, create_db_and_tables, dispose_engine
from src.platform.exception.exceptions import ConflictError
from src.service.ticketing.app.command.create_event_use_case import CreateEventUseCase
from src.service.ticketing.app.command.register_user_use_case import RegisterUserUseCase
from src.service.ticketing.driven_adapter.repo.event_command_repo_impl import (
    EventCommandRepoImpl,
)
from src.service.ticketing.driven_adapter.repo.user_command_repo_impl import UserCommandRepoImpl
from src.service.ticketing.driven_adapter.security.bcrypt_password_hasher import (
    BcryptPasswordHasher,
)

DEFAULT_PASSWORD = 'P@ssw0rd'
DEMO_USER_EMAIL = 'tiger@clemson.edu'


@dataclass
class EventConfig:
    """Event seed configuration"""

    name: str
    days_from_now: int
    location: str
    capacity: int


SAMPLE_EVENTS = [
    EventConfig('Homecoming Game', days_from_now=14, location='Memorial Stadium', capacity=500),
    EventConfig('Spring Concert', days_from_now=30, location='Littlejohn Coliseum', capacity=250),
    EventConfig('Career Fair', days_from_now=7, location='Hendrix Center', capacity=100),
    EventConfig('Tiger Theatre Night', days_from_now=21, location='Brooks Center', capacity=3),
]


async def create_demo_user(database: Database) -> None:
    use_case = RegisterUserUseCase(
        user_command_repo=UserCommandRepoImpl(session_factory=database.session),
        password_hasher=BcryptPasswordHasher(),
    )
    try:
        user = await use_case.register(
            email=DEMO_USER_EMAIL,
            password=SecretStr(DEFAULT_PASSWORD),
            first_name='Tiger',
            last_name='Paw',
        )
        print(f'   ✅ User {user.email} (id={user.id})')
    except ConflictError:
        print(f'   ⏭️  User {DEMO_USER_EMAIL} already exists')


async def create_events(database: Database) -> None:
    use_case = CreateEventUseCase(
        event_command_repo=EventCommandRepoImpl(session_factory=database.session)
    )
    # Round to the hour so seeded events look like real listings
    base_time = datetime.now(timezone.utc).replace(minute=0, second=0, microsecond=0)
    for config in SAMPLE_EVENTS:
        event = await use_case.create_event(
            name=config.name,
            starts_at=base_time + timedelta(days=config.days_from_now),
            location=config.location,
            capacity=config.capacity,
        )
        print(f'   ✅ Event {event.id}: {event.name} ({event.tickets_remaining} tickets)')


async def main() -> None:
    print('🌱 Seeding database...')
    print('=' * 50)

    try:
        await create_db_and_tables()
        database = Database()

        print('👤 Creating users...')
        await create_demo_user(database)

        print('🎫 Creating events...')
        await create_events(database)

        await dispose_engine()
        print('=' * 50)
        print('✅ Seed completed!')
        print(f'💡 Log in as {DEMO_USER_EMAIL} / {DEFAULT_PASSWORD}')

    except Exception as e:
        print(f'❌ Seed failed: {e}')
        exit(1)


if __name__ == '__main__':
    asyncio.run(main())
