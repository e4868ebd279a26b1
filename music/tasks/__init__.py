from .genre_tasks import recalculate_genre_track_counts

__all__ = ["recalculate_genre_track_counts"]
