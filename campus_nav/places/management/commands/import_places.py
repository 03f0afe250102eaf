import json

from django.core.management.base import BaseCommand, CommandError

from campus_nav.places.population import PlacePopulator


class Command(BaseCommand):
    help = "Import places from a JSON file (a list, or an object with a 'places' list)"  # noqa: A003

    def add_arguments(self, parser):
        parser.add_argument("path", type=str)
        parser.add_argument(
            "--geocode",
            action="store_true",
            help="Entries carry names only; look their coordinates up on Nominatim",
        )

    def handle(self, *args, **opts):
        path = opts["path"]

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            raise CommandError(f"File not found: {path}")
        except json.JSONDecodeError as e:
            raise CommandError(f"Invalid JSON in {path}: {e}")

        items = data.get("places") if isinstance(data, dict) else data
        if not isinstance(items, list):
            raise CommandError("Expected a list of places")

        populator = PlacePopulator()
        if opts["geocode"]:
            results = populator.import_from_osm(items)
            label = "Import completed"
        else:
            results = populator.bulk_import(items)
            label = "Bulk import completed"

        for entry in results.failed:
            self.stdout.write(self.style.ERROR(f"  ✗ {entry['name']}: {entry['error']}"))

        self.stdout.write(self.style.SUCCESS(results.summary(label)))
