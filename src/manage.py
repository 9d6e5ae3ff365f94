"""Storefront management CLI.

Usage:
    python src/manage.py setup-db                      # Create all tables / indices
    python src/manage.py drop-db                       # Drop all tables / indices
    python src/manage.py create-admin NAME EMAIL PASSWORD
    python src/manage.py issue-token EMAIL
"""

import argparse
import sys

from protean.exceptions import ValidationError


def _domain():
    from storefront.domain import storefront

    storefront.init()
    return storefront


def setup_database():
    storefront = _domain()
    print(f"Creating {storefront.name} database schema...")
    with storefront.domain_context():
        storefront.setup_database()
    print("Done.")


def drop_database():
    storefront = _domain()
    print(f"Dropping {storefront.name} database schema...")
    with storefront.domain_context():
        storefront.drop_database()
    print("Done.")


def create_admin(name, email, password):
    """Sign up ``email`` if needed, then grant it the admin role."""
    from storefront.identity.account import PromoteToAdmin, SignUp
    from storefront.identity.user import User

    storefront = _domain()
    with storefront.domain_context():
        user = storefront.repository_for(User).find_by_email(email)
        if user is None:
            user_id = storefront.process(SignUp(name=name, email=email, password=password), asynchronous=False)
        else:
            user_id = str(user.id)
        storefront.process(PromoteToAdmin(user_id=user_id), asynchronous=False)
    print(f"{email} is now an admin ({user_id}).")
    return user_id


def issue_token(email):
    from storefront.identity.tokens import issue_token as sign
    from storefront.identity.user import User

    storefront = _domain()
    with storefront.domain_context():
        user = storefront.repository_for(User).find_by_email(email)
        if user is None:
            print(f"No user with email {email}", file=sys.stderr)
            sys.exit(1)
        print(sign(user))


def main():
    parser = argparse.ArgumentParser(description="Storefront management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    admin_parser = subparsers.add_parser("create-admin", help="Create or promote an admin account")
    admin_parser.add_argument("name")
    admin_parser.add_argument("email")
    admin_parser.add_argument("password")

    token_parser = subparsers.add_parser("issue-token", help="Print a bearer token for a user")
    token_parser.add_argument("email")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "create-admin":
        try:
            create_admin(args.name, args.email, args.password)
        except ValidationError as exc:
            print(f"Could not create admin: {exc.messages}", file=sys.stderr)
            sys.exit(1)
    elif args.command == "issue-token":
        issue_token(args.email)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
