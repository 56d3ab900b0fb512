"""Create the database schema for a fresh installation."""
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.config import get_settings
from app.database import run_migrations
from app.logging_config import configure_logging


def main() -> None:
    configure_logging()
    settings = get_settings()
    run_migrations()
    print("Database migrated:", settings.database_url)


if __name__ == "__main__":
    main()
