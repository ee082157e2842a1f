import pytest

from campusnav.data.graph import CampusGraph, GraphBuilder
from campusnav.models.domain import Location, LocationCategory


def make_location(
    location_id: str,
    lat: float,
    lon: float,
    category: LocationCategory = LocationCategory.OTHER,
    name: str | None = None,
    description: str = "",
) -> Location:
    return Location(
        id=location_id,
        name=name or location_id.replace("_", " ").title(),
        latitude=lat,
        longitude=lon,
        category=category,
        description=description,
    )


CAMPUS_LOCATIONS = (
    make_location("main_gate", 5.6500, -0.1870, LocationCategory.ENTRANCE, description="Main campus entrance"),
    make_location("admin_block", 5.6510, -0.1865, LocationCategory.ADMINISTRATIVE),
    make_location("balme_library", 5.6520, -0.1860, LocationCategory.LIBRARY, description="Main university library"),
    make_location("great_hall", 5.6515, -0.1880, LocationCategory.LANDMARK, description="Ceremonial hall"),
    make_location("science_faculty", 5.6530, -0.1870, LocationCategory.ACADEMIC),
    make_location("gcb_bank", 5.6505, -0.1855, LocationCategory.BANK, name="GCB Bank"),
    make_location("legon_hall", 5.6535, -0.1855, LocationCategory.RESIDENTIAL),
    make_location("night_market", 5.6540, -0.1880, LocationCategory.DINING, description="Street food stalls"),
    make_location("remote_atm", 5.6600, -0.1900, LocationCategory.BANK, name="Remote ATM"),
)

CAMPUS_PATHS = (
    ("main_gate", "admin_block", 1.2),
    ("main_gate", "great_hall", 1.0),
    ("admin_block", "balme_library", 1.1),
    ("admin_block", "gcb_bank", 1.1),
    ("gcb_bank", "balme_library", 1.0),
    ("great_hall", "science_faculty", 1.0),
    ("great_hall", "balme_library", 1.0),
    ("balme_library", "science_faculty", 1.2),
    ("balme_library", "legon_hall", 1.0),
    ("science_faculty", "night_market", 1.0),
    ("legon_hall", "night_market", 1.5),
)


def build_campus() -> CampusGraph:
    builder = GraphBuilder().add_locations(CAMPUS_LOCATIONS)
    for first, second, difficulty in CAMPUS_PATHS:
        builder.add_bidirectional_edge(first, second, difficulty_multiplier=difficulty)
    return builder.build()


@pytest.fixture
def campus() -> CampusGraph:
    return build_campus()
