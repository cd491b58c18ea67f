"""Create the first admin user.

Usage:
    python -m portfolio_cms.scripts.init_admin
    python -m portfolio_cms.scripts.init_admin --email me@example.com --password secret

Credentials may also come from the ADMIN_EMAIL / ADMIN_PASSWORD
environment variables.
"""

import argparse
import asyncio
import os
import sys

from sqlalchemy import select

from portfolio_cms.core.database import get_db_context
from portfolio_cms.core.security import hash_password
from portfolio_cms.modules.auth.models import AdminUser, UserRole


async def create_admin_user(
    db,
    email: str,
    password: str,
    full_name: str | None = None,
    reset_password: bool = False,
) -> AdminUser:
    """Create an admin user, or promote and reactivate an existing one."""
    print("👤 Creating admin user...")

    result = await db.execute(select(AdminUser).where(AdminUser.email == email))
    existing = result.scalar_one_or_none()

    if existing:
        existing.role = UserRole.ADMIN
        existing.is_active = True
        if reset_password:
            existing.password_hash = hash_password(password)
            print(f"  🔑 Password reset for: {email}")
        print(f"  ⚠️  User already exists, ensured admin role: {email}")
        await db.flush()
        return existing

    admin = AdminUser(
        email=email,
        password_hash=hash_password(password),
        full_name=full_name,
        role=UserRole.ADMIN,
        is_active=True,
    )
    db.add(admin)
    await db.flush()

    print(f"  ✅ Created admin user: {email}")
    print("  ⚠️  IMPORTANT: Change password after first login!")

    return admin


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create the first admin user")
    parser.add_argument("--email", default=os.environ.get("ADMIN_EMAIL", "admin@example.com"))
    parser.add_argument("--password", default=os.environ.get("ADMIN_PASSWORD"))
    parser.add_argument("--name", default=os.environ.get("ADMIN_NAME"))
    parser.add_argument(
        "--reset-password",
        action="store_true",
        help="Overwrite the password of an existing user",
    )
    return parser.parse_args(argv)


async def main(argv: list[str] | None = None) -> int:
    """Main initialization function."""
    args = parse_args(argv)

    print("=" * 60)
    print("🚀 Initializing Admin User")
    print("=" * 60)
    print()

    if not args.password:
        print("❌ No password given. Use --password or ADMIN_PASSWORD.")
        return 1

    try:
        async with get_db_context() as db:
            await create_admin_user(
                db,
                email=args.email.lower(),
                password=args.password,
                full_name=args.name,
                reset_password=args.reset_password,
            )
            await db.commit()
    except Exception as e:
        print(f"❌ Error: {e}")
        return 1

    print()
    print("✅ Done")
    return 0


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
