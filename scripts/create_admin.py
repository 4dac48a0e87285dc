"""Create an administrator account.

Roles are fixed at creation and the API only ever registers customers,
so admins are seeded directly against the database with this script.

Usage:
    PYTHONPATH=src uv run python scripts/create_admin.py --email admin@example.com --name "Site Admin"
    PYTHONPATH=src uv run python scripts/create_admin.py --email admin@example.com --name Admin --password-stdin < pw.txt
"""

import argparse
import getpass
import logging
import sys

from dotenv import load_dotenv

load_dotenv()

from adapter.mongodb.connection import get_database
from adapter.mongodb.user_repository import MongoUserRepository
from domain.model.errors import DomainError
from services import auth_service
from utils.logging import setup_structured_logging

logger = logging.getLogger("create_admin")


def _read_password(from_stdin: bool) -> str:
    if from_stdin:
        return sys.stdin.readline().rstrip("\n")
    password = getpass.getpass("Password: ")
    if password != getpass.getpass("Repeat password: "):
        raise SystemExit("Passwords do not match")
    return password


def main() -> int:
    parser = argparse.ArgumentParser(description="Create an administrator account")
    parser.add_argument("--email", required=True, help="Login email for the admin")
    parser.add_argument("--name", required=True, help="Display name")
    parser.add_argument("--password-stdin", action="store_true", help="Read the password from stdin")
    args = parser.parse_args()

    setup_structured_logging()

    db = get_database()
    if db is None:
        logger.error("Cannot reach MongoDB, check MONGO_URL")
        return 1

    repo = MongoUserRepository(db)
    repo.ensure_indexes()

    try:
        user = auth_service.create_admin(repo, args.email, _read_password(args.password_stdin), args.name)
    except DomainError as e:
        logger.error("Admin creation failed", extra={"error": str(e)})
        return 1

    print(f"Created admin {user.email} ({user.id})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
