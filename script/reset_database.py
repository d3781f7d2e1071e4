#!/usr/bin/env python3
"""
Database Reset Script
Reset the SQLite database structure

Features:
1. Remove the SQLite file (with --force) - completely wipe the database
2. Create tables - create the latest schema if absent

Notes:
- This script only resets database structure, does not seed test data
- To seed sample events and users, run `python -m script.seed_data`
"""

import argparse
import asyncio

from src.platform.config.core_setting import settings
from src.platform.database.orm_db_setting import create_db_and_tables, dispose_engine


def _remove_sqlite_files() -> None:
    """Remove the database file and its WAL/SHM companions"""
    db_path = settings.SQLITE_DB_PATH
    if db_path is None:
        print('   ⏭️  In-memory database, nothing to remove')
        return

    companions = [db_path.with_name(f'{db_path.name}{suffix}') for suffix in ('-wal', '-shm')]
    for path in (db_path, *companions):
        if path.exists():
            path.unlink()
            print(f'   ✅ Removed {path}')


async def main(*, force: bool) -> None:
    print('🔄 Starting database reset...')
    print('=' * 50)
    print(f'Database URL: {settings.DATABASE_URL}')

    try:
        if force:
            print('🗑️ Removing database file...')
            _remove_sqlite_files()

        print('🏗️ Creating tables...')
        await create_db_and_tables()
        await dispose_engine()

        print('=' * 50)
        print('✅ Database reset completed!')
        print('💡 To seed sample data, run: python -m script.seed_data')

    except Exception as e:
        print(f'❌ Reset failed: {e}')
        exit(1)


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='Create the TigerTix schema')
    parser.add_argument('--force', action='store_true', help='delete the SQLite file first')
    args = parser.parse_args()
    asyncio.run(main(force=args.force))
