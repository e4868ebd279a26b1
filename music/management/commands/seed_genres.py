import logging

from django.core.management.base import BaseCommand
from django.db import transaction

from music.models import Genre
from music.services.genres import create_genre

logger = logging.getLogger(__name__)

ROOT_GENRES = [
    ("Electronic", "Electronic music and EDM"),
    ("Hip-Hop", "Hip-hop and rap music"),
    ("Rock", "Rock music in all its forms"),
    ("Jazz", "Jazz and improvisational music"),
    ("Classical", "Classical and orchestral music"),
    ("Pop", "Popular music"),
    ("R&B", "Rhythm and blues"),
    ("Country", "Country and western music"),
    ("Indie", "Independent and alternative music"),
    ("Blues", "Blues music"),
    ("Folk", "Folk and acoustic music"),
    ("Reggae", "Reggae and Caribbean music"),
    ("Metal", "Heavy metal and hard rock"),
    ("Punk", "Punk rock music"),
    ("Latin", "Latin and Spanish music"),
    ("World", "World music from various cultures"),
    ("Ambient", "Ambient and atmospheric music"),
    ("Gospel", "Gospel and Christian music"),
    ("Soul", "Soul music"),
    ("Funk", "Funk music"),
]

SUB_GENRES = {
    "Electronic": [
        ("House", "House music"),
        ("Techno", "Techno music"),
        ("Trance", "Trance music"),
        ("Dubstep", "Dubstep music"),
        ("Drum & Bass", "Drum and bass"),
        ("Ambient Electronic", "Ambient electronic music"),
    ],
    "Hip-Hop": [
        ("Trap", "Trap music"),
        ("Old School", "Old school hip-hop"),
        ("East Coast", "East Coast hip-hop"),
        ("West Coast", "West Coast hip-hop"),
        ("Southern", "Southern hip-hop"),
    ],
    "Rock": [
        ("Alternative Rock", "Alternative rock"),
        ("Indie Rock", "Indie rock"),
        ("Classic Rock", "Classic rock"),
        ("Hard Rock", "Hard rock"),
        ("Progressive Rock", "Progressive rock"),
    ],
    "Jazz": [
        ("Bebop", "Bebop jazz"),
        ("Smooth Jazz", "Smooth jazz"),
        ("Fusion", "Jazz fusion"),
        ("Latin Jazz", "Latin jazz"),
    ],
    "Pop": [
        ("Pop Rock", "Pop rock"),
        ("Dance Pop", "Dance pop"),
        ("Indie Pop", "Indie pop"),
    ],
    "R&B": [
        ("Contemporary R&B", "Contemporary R&B"),
        ("Neo Soul", "Neo soul"),
    ],
    "Country": [
        ("Country Pop", "Country pop"),
        ("Bluegrass", "Bluegrass"),
        ("Outlaw Country", "Outlaw country"),
    ],
}


class Command(BaseCommand):
    help = "Seed the predefined genre hierarchy (skipped when genres already exist)"

    @transaction.atomic
    def handle(self, *args, **options):
        if Genre.objects.exists():
            self.stdout.write("Genres already seeded. Skipping...")
            return

        roots = {}
        for name, description in ROOT_GENRES:
            roots[name] = create_genre(name=name, description=description)

        created = len(roots)
        for parent_name, children in SUB_GENRES.items():
            parent = roots[parent_name]
            for name, description in children:
                create_genre(name=name, description=description, parent_genre_id=parent.pk)
                created += 1

        logger.info(f"Seeded {created} genres")
        self.stdout.write(self.style.SUCCESS(f"Created {created} genres"))
