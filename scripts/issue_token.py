#!/usr/bin/env python3
"""Issue a development token for a campus user.

In production tokens come from the identity provider. Locally, this prints
one signed with ``AUTH__JWT_SECRET`` so the API can be called by hand:

    python scripts/issue_token.py alice --email alice@example.edu
"""

import argparse
import sys
from uuid import UUID, uuid4

from carpool.config import Settings
from carpool.util.jwt import create_token


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("handle", help="Display handle of the user")
    parser.add_argument("--email", default=None)
    parser.add_argument(
        "--user-id",
        type=UUID,
        default=None,
        help="Reuse an existing user id instead of generating one",
    )
    args = parser.parse_args()

    settings = Settings()
    if settings.environment in ("staging", "production"):
        print("Refusing to issue tokens outside development", file=sys.stderr)
        return 1

    user_id = str(args.user_id or uuid4())
    print(create_token(user_id, args.handle, args.email, settings.auth))
    return 0


if __name__ == "__main__":
    sys.exit(main())
