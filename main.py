"""
timekeeping – Main entry point.

Minimal bootstrap script to verify the project structure and configuration
are in place: prints the (skew-corrected) current time in storage format.
"""

from src.config.settings import get_settings
from src.timekeeping.storage import format_for_storage
from src.utils.time import corrected_now


def main() -> None:
    """Print the configured formats and the current time in storage format."""
    settings = get_settings()
    print(f"date format: {settings.date_spec}  time format: {settings.time_spec}")
    print(f"now: {format_for_storage(corrected_now())}")


if __name__ == "__main__":
    main()
