# places/management/commands/populate_college_places.py

from django.core.management.base import BaseCommand

from campus_nav.places.college_places import COLLEGE_PLACES
from campus_nav.places.models import Place
from campus_nav.places.population import PlacePopulator
from campus_nav.routing.geocoding import GeocodingService


class Command(BaseCommand):
    help = "Seed the place store with the fixed NIT Warangal list, geocoded through Nominatim"  # noqa: A003

    def add_arguments(self, parser):
        parser.add_argument(
            "--limit",
            type=int,
            help="Only process the first N places of the list (for testing)",
        )
        parser.add_argument(
            "--delay",
            type=float,
            default=None,
            help="Seconds to wait before each Nominatim request, never below 1 (default: GEOCODE_MIN_DELAY_SECONDS)",
        )

    def handle(self, *args, **options):
        limit = options["limit"]
        places = COLLEGE_PLACES[:limit] if limit else COLLEGE_PLACES

        self.stdout.write(self.style.WARNING(f"Populating {len(places)} places (about 1 request per second)..."))

        populator = PlacePopulator(geocoder=GeocodingService(min_delay=options["delay"]))
        results = populator.populate_college_places(places)

        for entry in results.created:
            coords = entry["coordinates"]
            note = f" ({entry['note']})" if entry.get("note") else ""
            self.stdout.write(self.style.SUCCESS(f"  ✓ {entry['name']} @ {coords['lat']:.5f},{coords['lng']:.5f}{note}"))
        for entry in results.skipped:
            self.stdout.write(self.style.WARNING(f"  - {entry['name']}: {entry['reason']}"))
        for entry in results.failed:
            self.stdout.write(self.style.ERROR(f"  ✗ {entry['name']}: {entry['error']}"))

        self.stdout.write("\n" + "=" * 60)
        self.stdout.write(self.style.SUCCESS(results.summary("College places populated")))
        self.stdout.write("=" * 60)
        self.stdout.write(f"Total places in database: {Place.objects.count()}")
