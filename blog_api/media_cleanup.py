"""
CLI entrypoint for the orphan media cleanup job. Run from cron, e.g.:

  python -m blog_api.media_cleanup [--dry-run]

Or nightly: 0 3 * * * cd /path/to/blog-api && .venv/bin/python -m blog_api.media_cleanup
"""

import argparse
import logging
import sys

from dotenv import load_dotenv

load_dotenv()

from blog_api.core.config import get_settings
from blog_api.core.database import SessionLocal
from blog_api.services.media import MediaStore
from blog_api.services.media_cleanup import run_media_cleanup

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Remove files in UPLOAD_DIR that no user or post references."""
    parser = argparse.ArgumentParser(description="Delete orphaned avatar/thumbnail files.")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Only list orphaned files; do not delete them.",
    )
    args = parser.parse_args(argv)

    settings = get_settings()
    media = MediaStore(settings.UPLOAD_DIR)
    db = SessionLocal()
    try:
        removed, failed = run_media_cleanup(db, media, dry_run=args.dry_run)
        for name in removed:
            print(name)
        logger.info(
            "Media cleanup completed: %s=%s, failed=%s",
            "orphans" if args.dry_run else "removed",
            len(removed),
            len(failed),
        )
        return 1 if failed else 0
    except Exception as e:
        logger.exception("Media cleanup failed: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
