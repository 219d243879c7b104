"""Utility script to register a user and print a bearer token for it."""

from __future__ import annotations

import argparse

from app.application.use_cases.users import create_user
from app.domain.exceptions import ComplianceError
from app.infrastructure.database import SessionLocal, initialize_database
from app.infrastructure.security import create_user_token


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for user creation."""

    parser = argparse.ArgumentParser(
        description="Create a trader or administrator for the compliance API.",
    )
    parser.add_argument(
        "--email",
        default="admin@example.com",
        help="Email address of the user (default: admin@example.com)",
    )
    parser.add_argument("--full-name", default=None, help="Full name shown in listings")
    parser.add_argument("--username", default=None, help="Optional username")
    parser.add_argument(
        "--role",
        choices=["admin", "trader"],
        default="admin",
        help="Role of the new user (default: admin)",
    )
    return parser.parse_args()


def main() -> None:
    """Create a user using the provided command line arguments."""

    args = parse_args()
    initialize_database()

    session = SessionLocal()
    try:
        user = create_user(
            session,
            email=args.email,
            full_name=args.full_name,
            username=args.username,
            role_alias=args.role,
        )
    except ComplianceError as exc:
        raise SystemExit(f"Could not create the user: {exc}") from exc
    finally:
        session.close()

    print(
        "User created:\n"
        f"  ID: {user.id}\n"
        f"  Email: {user.email}\n"
        f"  Role: {user.role.alias}\n"
        f"  Token: {create_user_token(user.email)}"
    )


if __name__ == "__main__":
    main()
