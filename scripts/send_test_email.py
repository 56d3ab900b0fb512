"""Send a test message through the configured mail transport."""
import argparse
import json
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.logging_config import configure_logging
from app.services.mailer_service import OutboundEmail, get_mailer


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Send a test email")
    parser.add_argument("--to", required=True, help="Recipient address")
    parser.add_argument("--subject", default="Tennis Coaching test email", help="Subject line")
    return parser.parse_args()


def main() -> int:
    configure_logging()
    args = parse_args()

    result = get_mailer().send_mail(
        OutboundEmail(
            to=args.to,
            subject=args.subject,
            html="<p>This is a test email from the tennis coaching API.</p>",
            text="This is a test email from the tennis coaching API.",
        )
    )
    print(json.dumps(result.model_dump(exclude_none=True), indent=2))
    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
