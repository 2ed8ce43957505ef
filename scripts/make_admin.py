"""Promote an existing user to administrator.

Usage: python scripts/make_admin.py USERNAME
"""
import sys
import os

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from todoapp import create_app
from todoapp.services import store


def main(argv):
    if len(argv) != 2:
        print(__doc__.strip())
        return 2

    app = create_app()
    with app.app_context():
        user = store.find_user_by_username(argv[1].strip())
        if user is None:
            print(f"No user named {argv[1]!r}")
            return 1
        if user.is_admin:
            print("User is already an admin")
            return 0
        store.set_admin(user.id)
        print("Existing user promoted to admin")
    return 0


if __name__ == '__main__':
    sys.exit(main(sys.argv))
