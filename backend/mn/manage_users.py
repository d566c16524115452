"""
Command line user management.

    mn-users create
    mn-users change-password <username>
    mn-users delete <username>

Passwords are always read interactively without echo.
"""
import argparse
import getpass
import sys
from mn.core.errors import BackendError
from mn.db.session import SessionLocal, init_db
from mn.services import user_service


def _read_username(args) -> str:
    username = args.username or input("Enter the username:\n")
    username = username.strip()
    if not username:
        raise SystemExit("Please enter a username")
    return username


def _read_password(prompt: str) -> str:
    password = getpass.getpass(prompt)
    if not password:
        raise SystemExit("Please enter a password")
    if getpass.getpass("Repeat the password:\n") != password:
        raise SystemExit("Passwords do not match")
    return password


def create(args, db):
    username = _read_username(args)
    password = _read_password("\nEnter the password for this user:\n")
    user = user_service.create_user(username, password, db)
    print(f"\nSaved user {user.username} (id: {user.id})")


def change_password(args, db):
    user = user_service.get_user_by_username(_read_username(args), db)
    password = _read_password(f"\nEnter the new password for {user.username}:\n")
    user_service.change_password(user.id, password, db)
    print(f"\nChanged password of user {user.username} (id: {user.id})")


def delete(args, db):
    user = user_service.get_user_by_username(_read_username(args), db)
    answer = input(f"Delete user {user.username} and all their notes? [y/N] ")
    if answer.strip().lower() != "y":
        print("Aborted")
        return
    user_service.delete_user(user.id, db)
    print(f"\nDeleted user {user.username} (id: {user.id})")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="mn-users", description="Manage markdown-notebook users")
    subparsers = parser.add_subparsers(dest="command", required=True)

    for name, handler in (("create", create), ("change-password", change_password), ("delete", delete)):
        subparser = subparsers.add_parser(name)
        subparser.add_argument("username", nargs="?", help="asked for interactively if omitted")
        subparser.set_defaults(handler=handler)
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    init_db()
    db = SessionLocal()
    try:
        args.handler(args, db)
    except BackendError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
