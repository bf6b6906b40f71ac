"""
Provision a user for sign in. Users are never created through the API.

    python scripts/create_user.py alice
    python scripts/create_user.py alice --password secret --init-db
"""

import argparse
import asyncio
import getpass

import structlog
from sqlalchemy.dialects import mysql, postgresql, sqlite

from todos import database
from todos.logging_config import setup_logging
from todos.models.user import User
from todos.security import hash_password

log = structlog.get_logger()

UPSERTS = {"postgresql": postgresql.insert, "sqlite": sqlite.insert}


async def create_user(username: str, password: str, *, engine=None, init_db: bool = False) -> None:
    """Insert the user, or reset the password of an existing one."""
    engine = engine or database.engine
    if init_db:
        await database.init_db(engine)
    values = {"username": username, "password_hash": hash_password(password)}
    dialect = engine.dialect.name
    if dialect == "mysql":
        stmt = mysql.insert(User).values(**values)
        stmt = stmt.on_duplicate_key_update(password_hash=stmt.inserted.password_hash)
    else:
        stmt = UPSERTS[dialect](User).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[User.username], set_={"password_hash": stmt.excluded.password_hash}
        )
    async with database.make_sessionmaker(engine)() as db:
        await db.execute(stmt)
        await db.commit()
    log.info("user provisioned", username=username)


def main() -> None:
    parser = argparse.ArgumentParser(description="Create or reset a todos user")
    parser.add_argument("username")
    parser.add_argument("--password", help="prompted for when omitted")
    parser.add_argument("--init-db", action="store_true", help="create the tables first")
    args = parser.parse_args()

    setup_logging()
    password = args.password or getpass.getpass(f"Password for {args.username}: ")
    asyncio.run(create_user(args.username, password, init_db=args.init_db))


if __name__ == "__main__":
    main()
