"""
Seed or update the initial system_admin account.

Usage:
    python -m scripts.seed_system_admin --login-id admin --email admin@example.com \
        --password secret --name "System Admin"

Omitted options fall back to SYSTEM_ADMIN_LOGIN_ID, SYSTEM_ADMIN_EMAIL,
SYSTEM_ADMIN_PASSWORD and SYSTEM_ADMIN_NAME.
"""

import argparse
import asyncio
import logging
import os
from dataclasses import dataclass
from typing import List, Optional

from config import ApplicationConfig
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.credentials import hash_password_async, validate_password
from src.domain.entities import Account, Role, normalize_email

logger = logging.getLogger("seed_system_admin")


@dataclass(frozen=True)
class SeedOptions:
    login_id: str
    email: str
    password: str
    name: str


def parse_options(argv: Optional[List[str]] = None, env=None) -> SeedOptions:
    """
    Resolve options from the command line, then the environment.

    Raises:
        ValueError: login id, email or password missing
    """
    env = os.environ if env is None else env
    parser = argparse.ArgumentParser(description="Create or update the system_admin account")
    parser.add_argument("--login-id")
    parser.add_argument("--email")
    parser.add_argument("--password")
    parser.add_argument("--name")
    args = parser.parse_args(argv)

    login_id = (
        args.login_id
        or env.get("SYSTEM_ADMIN_LOGIN_ID")
        or args.email
        or env.get("SYSTEM_ADMIN_EMAIL")
    )
    email = args.email or env.get("SYSTEM_ADMIN_EMAIL") or login_id
    password = args.password or env.get("SYSTEM_ADMIN_PASSWORD")
    name = args.name or env.get("SYSTEM_ADMIN_NAME") or "System Admin"

    if not login_id:
        raise ValueError("login id is required (--login-id)")
    if not email:
        raise ValueError("email is required (--email)")
    if not password:
        raise ValueError("password is required (--password)")
    check = validate_password(password)
    if check.is_err():
        raise ValueError(check.error.message)

    return SeedOptions(
        login_id=login_id.strip(), email=normalize_email(email), password=password, name=name
    )


async def seed_system_admin(uow: UnitOfWork, options: SeedOptions) -> tuple[Account, bool]:
    """
    Upsert the system_admin, matched by login id first and then email.

    The account is forced to state active with the given password.

    Returns:
        (account, created)
    """
    async with uow:
        account = await uow.accounts.get_by_login_id(options.login_id)
        if account is None:
            account = await uow.accounts.get_by_email(options.email)

        password_hash = await hash_password_async(options.password)
        created = account is None
        if created:
            account = await uow.accounts.create(
                Account(
                    name=options.name,
                    email=options.email,
                    login_id=options.login_id,
                    password_hash=password_hash,
                    role=Role.system_admin,
                )
            )
        else:
            account.name = options.name
            account.email = options.email
            account.login_id = options.login_id
            account.password_hash = password_hash
            account.role = Role.system_admin
            account.must_change_password = False
            account.mark_active()
            account.clear_reset_token()
            account.updated_at = utcnow()
            account = await uow.accounts.update(account)

        await uow.commit()
        return account, created


async def main(argv: Optional[List[str]] = None) -> None:
    from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
    from src.depends import AsyncSessionLocal, create_tables

    options = parse_options(argv)
    await create_tables()
    async with AsyncSessionLocal() as session:
        account, created = await seed_system_admin(SqlAlchemyUnitOfWork(session), options)
        logger.info(
            f"{'Created' if created else 'Updated'} system_admin "
            f"id={account.id} internal_id={account.internal_id} "
            f"login_id={account.login_id} email={account.email}"
        )


if __name__ == "__main__":
    logging.basicConfig(level=ApplicationConfig.LOG_LEVEL.upper())
    asyncio.run(main())
