import logging

from celery import shared_task

from music.services.genres import recalculate_all_track_counts
from utils.locks import ResourceLock, ResourceLockedException

logger = logging.getLogger(__name__)


@shared_task
def recalculate_genre_track_counts():
    """
    Nightly repair of Genre.track_count. Track deletions cascade through
    track_genres without touching the cached counts, so they can drift.
    """
    try:
        with ResourceLock("genre_track_counts", "all", timeout=900):
            return recalculate_all_track_counts()
    except ResourceLockedException:
        logger.info("Track count recalculation already running, skipping")
        return None
