"""
Full-text and fuzzy search support (PostgreSQL only).

- pg_trgm for similarity() and trigram GIN indexes
- triggers keeping artists/tracks search_vector in sync with their text
- GIN indexes on the vectors and on the fuzzy-matched columns

Other backends skip every step; search falls back to substring matching there.
"""
from django.contrib.postgres.operations import TrigramExtension
from django.db import migrations

VECTOR_TRIGGERS = {
    "artists": (
        "setweight(to_tsvector('english', coalesce(NEW.name, '')), 'A') || "
        "setweight(to_tsvector('english', coalesce(NEW.genre, '')), 'A') || "
        "setweight(to_tsvector('english', coalesce(NEW.bio, '')), 'B')"
    ),
    "tracks": (
        "setweight(to_tsvector('english', coalesce(NEW.title, '')), 'A') || "
        "setweight(to_tsvector('english', coalesce(NEW.genre, '')), 'A') || "
        "setweight(to_tsvector('english', coalesce(NEW.description, '')), 'B')"
    ),
}

TRIGRAM_COLUMNS = {
    "artists": ["name", "genre"],
    "tracks": ["title", "genre", "description"],
}


def forwards(apps, schema_editor):
    if schema_editor.connection.vendor != "postgresql":
        return

    for table, expression in VECTOR_TRIGGERS.items():
        schema_editor.execute(f"""
            CREATE OR REPLACE FUNCTION {table}_search_vector_update() RETURNS trigger AS $$
            BEGIN
                NEW.search_vector := {expression};
                RETURN NEW;
            END
            $$ LANGUAGE plpgsql
        """)
        schema_editor.execute(f"""
            CREATE TRIGGER {table}_search_vector_trigger
            BEFORE INSERT OR UPDATE ON "{table}"
            FOR EACH ROW EXECUTE FUNCTION {table}_search_vector_update()
        """)
        # backfill rows that existed before the trigger
        schema_editor.execute(f'UPDATE "{table}" SET id = id')
        schema_editor.execute(
            f'CREATE INDEX IF NOT EXISTS "idx_{table}_search_vector" '
            f'ON "{table}" USING GIN ("search_vector")'
        )

    for table, columns in TRIGRAM_COLUMNS.items():
        for column in columns:
            schema_editor.execute(
                f'CREATE INDEX IF NOT EXISTS "idx_{table}_{column}_trgm" '
                f'ON "{table}" USING GIN ("{column}" gin_trgm_ops)'
            )


def backwards(apps, schema_editor):
    if schema_editor.connection.vendor != "postgresql":
        return

    for table, columns in TRIGRAM_COLUMNS.items():
        for column in columns:
            schema_editor.execute(f'DROP INDEX IF EXISTS "idx_{table}_{column}_trgm"')

    for table in VECTOR_TRIGGERS:
        schema_editor.execute(f'DROP INDEX IF EXISTS "idx_{table}_search_vector"')
        schema_editor.execute(f'DROP TRIGGER IF EXISTS {table}_search_vector_trigger ON "{table}"')
        schema_editor.execute(f"DROP FUNCTION IF EXISTS {table}_search_vector_update()")


class Migration(migrations.Migration):

    dependencies = [
        ("music", "0001_initial"),
    ]

    operations = [
        TrigramExtension(),
        migrations.RunPython(forwards, backwards),
    ]
