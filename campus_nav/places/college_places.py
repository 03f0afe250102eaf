from .models import PlaceCategory

# Approximate centre of NIT Warangal; used when geocoding yields nothing.
FALLBACK_LATITUDE = 17.9833
FALLBACK_LONGITUDE = 79.5300

COLLEGE_PLACES = [
    # Educational buildings
    {
        "name": "NIT Warangal Main Building",
        "category": PlaceCategory.EDUCATIONAL,
        "description": "Main administrative and academic building",
    },
    {
        "name": "NIT Warangal CSE Department",
        "category": PlaceCategory.EDUCATIONAL,
        "description": "Computer Science and Engineering Department",
    },
    {
        "name": "NIT Warangal ECE Department",
        "category": PlaceCategory.EDUCATIONAL,
        "description": "Electronics and Communication Engineering Department",
    },
    {
        "name": "NIT Warangal Mechanical Department",
        "category": PlaceCategory.EDUCATIONAL,
        "description": "Mechanical Engineering Department",
    },
    {
        "name": "NIT Warangal Civil Department",
        "category": PlaceCategory.EDUCATIONAL,
        "description": "Civil Engineering Department",
    },
    {
        "name": "NIT Warangal Electrical Department",
        "category": PlaceCategory.EDUCATIONAL,
        "description": "Electrical Engineering Department",
    },
    {
        "name": "NIT Warangal Chemical Department",
        "category": PlaceCategory.EDUCATIONAL,
        "description": "Chemical Engineering Department",
    },
    {
        "name": "NIT Warangal Library",
        "category": PlaceCategory.LIBRARY,
        "description": "Central library with books and study spaces",
    },
    # Administration
    {
        "name": "NIT Warangal Registrar Office",
        "category": PlaceCategory.ADMINISTRATION,
        "description": "Registrar and administrative services",
    },
    {
        "name": "NIT Warangal Dean Office",
        "category": PlaceCategory.ADMINISTRATION,
        "description": "Dean of Academic Affairs office",
    },
    # Recreation
    {"name": "NIT Warangal Stadium", "category": PlaceCategory.RECREATION, "description": "Main sports stadium"},
    {"name": "NIT Warangal Gymnasium", "category": PlaceCategory.RECREATION, "description": "Gym and fitness center"},
    {
        "name": "NIT Warangal Swimming Pool",
        "category": PlaceCategory.RECREATION,
        "description": "Swimming pool facility",
    },
    {"name": "NIT Warangal Badminton Court", "category": PlaceCategory.RECREATION, "description": "Badminton courts"},
    {
        "name": "NIT Warangal Basketball Court",
        "category": PlaceCategory.RECREATION,
        "description": "Basketball courts",
    },
    {
        "name": "NIT Warangal Cricket Ground",
        "category": PlaceCategory.RECREATION,
        "description": "Cricket playing ground",
    },
    # Eateries
    {"name": "NIT Warangal Mess", "category": PlaceCategory.EATERIES, "description": "Main mess/cafeteria"},
    {"name": "NIT Warangal Canteen", "category": PlaceCategory.EATERIES, "description": "College canteen"},
    {
        "name": "NIT Warangal Food Court",
        "category": PlaceCategory.EATERIES,
        "description": "Food court with various vendors",
    },
    # Hostels
    {"name": "NIT Warangal Hostel Block A", "category": PlaceCategory.HOSTEL, "description": "Boys hostel block A"},
    {"name": "NIT Warangal Hostel Block B", "category": PlaceCategory.HOSTEL, "description": "Boys hostel block B"},
    {"name": "NIT Warangal Girls Hostel", "category": PlaceCategory.HOSTEL, "description": "Girls hostel"},
    # Staff quarters
    {
        "name": "NIT Warangal Staff Quarters",
        "category": PlaceCategory.STAFF_QUARTERS,
        "description": "Staff residential quarters",
    },
    # Other
    {"name": "NIT Warangal Gate", "category": PlaceCategory.OTHER, "description": "Main entrance gate"},
    {"name": "NIT Warangal Parking", "category": PlaceCategory.OTHER, "description": "Main parking area"},
    {
        "name": "NIT Warangal Medical Center",
        "category": PlaceCategory.OTHER,
        "description": "Health center and medical facility",
    },
]

# Names searched on Mapbox by the grid seeding utility before the grid scan.
KNOWN_CAMPUS_NAMES = [
    "NIT Warangal",
    "Ambedkar Learning Centre",
    "Central Library NIT Warangal",
    "NITW Sports Complex",
    "Kakatiya Hostel",
    "Sarojini Naidu Hostel",
    "NITW Health Centre",
    "Vagdevi Temple",
    "SBI NIT Warangal",
    "NITW Post Office",
]

CATEGORY_KEYWORDS = [
    (PlaceCategory.LIBRARY, ("library", "reading room")),
    (PlaceCategory.HOSTEL, ("hostel", "hall of residence", "dorm")),
    (PlaceCategory.STAFF_QUARTERS, ("quarters", "staff colony", "residence")),
    (
        PlaceCategory.EATERIES,
        ("restaurant", "cafe", "café", "canteen", "mess", "food", "bakery", "juice", "tea", "dhaba"),
    ),
    (
        PlaceCategory.RECREATION,
        ("stadium", "gym", "court", "ground", "pool", "sports", "park", "playground", "auditorium"),
    ),
    (PlaceCategory.ADMINISTRATION, ("registrar", "dean", "admin", "office", "bank", "post office")),
    (
        PlaceCategory.EDUCATIONAL,
        ("department", "school", "college", "institute", "lab", "academic", "lecture", "learning centre"),
    ),
]


def infer_category(*texts: str) -> str:
    """First category whose keywords appear in any of ``texts``; ``other`` otherwise."""
    haystack = " ".join(t.lower() for t in texts if t)
    for category, keywords in CATEGORY_KEYWORDS:
        if any(kw in haystack for kw in keywords):
            return category
    return PlaceCategory.OTHER
