from .artist import Artist
from .track import Track
from .genre import Genre
from .track_genre import TrackGenre

__all__ = ["Artist", "Track", "Genre", "TrackGenre"]
