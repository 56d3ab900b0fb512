"""Print a bearer token for an existing account (local development helper)."""
import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.auth import create_access_token
from app.database import SessionLocal
from app.models.database_models import Account


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Issue an access token for an account",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Token with the default lifetime
  python scripts/issue_token.py --email john@example.com

  # Token valid for one day
  python scripts/issue_token.py --email coach@example.com --minutes 1440
        """
    )
    parser.add_argument("--email", required=True, help="Email of the account to issue a token for")
    parser.add_argument("--minutes", type=int, help="Token lifetime in minutes (default: settings)")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    db = SessionLocal()
    try:
        account = db.query(Account).filter(Account.email == args.email).first()
    finally:
        db.close()

    if account is None:
        print(f"No account with email {args.email}", file=sys.stderr)
        return 1
    if not account.is_active:
        print(f"Account {args.email} is inactive", file=sys.stderr)
        return 1

    print(create_access_token(account.id, account.email, account.role, expires_minutes=args.minutes))
    return 0


if __name__ == "__main__":
    sys.exit(main())
