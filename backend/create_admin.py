import argparse
import getpass

# Run this script from the `backend` directory so the .env file is found.
from app.core.config import settings
from app.services.auth_service import create_admin
from app.storage.errors import DuplicateKeyError
from app.storage.store import build_store


def main():
    parser = argparse.ArgumentParser(description="Create an admin account in the active store")
    parser.add_argument("email")
    parser.add_argument("--name", default=None)
    args = parser.parse_args()

    password = getpass.getpass("Password: ")
    if len(password) < settings.MIN_PASSWORD_LENGTH:
        print(f"FATAL ERROR: Password must be at least {settings.MIN_PASSWORD_LENGTH} characters.")
        raise SystemExit(1)

    store = build_store(settings)
    try:
        admin = create_admin(store, args.email, password, name=args.name)
    except DuplicateKeyError:
        print(f"FATAL ERROR: An admin with email {args.email} already exists.")
        raise SystemExit(1)

    print(f"✅ Admin created in {store.mode} store: {admin['id']} ({admin['email']})")


if __name__ == "__main__":
    main()
