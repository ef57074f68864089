"""Campus libraries seeded on first run. Capacities never change at runtime."""

from typing import List

from src.service.seating.domain.entity.library_entity import Library


DEFAULT_LIBRARY_ROSTER: tuple[dict, ...] = (
    {
        'id': 'gehu-central',
        'name': 'Central Library',
        'building': 'Graphic Era Hill University',
        'total_spots': 16,
        'admin_pin': '1111',
        'latitude': 30.2723733,
        'longitude': 77.9997382,
    },
    {
        'id': 'gehu-law',
        'name': 'Law Library',
        'building': 'GEHU Law Block',
        'total_spots': 10,
        'admin_pin': '2222',
        'latitude': 30.2720000,
        'longitude': 77.9990000,
    },
    {
        'id': 'santoshanad',
        'name': 'Santoshanad Library',
        'building': 'Santoshanad Block',
        'total_spots': 12,
        'admin_pin': '3333',
        'latitude': 30.2673625,
        'longitude': 77.9931595,
    },
    {
        'id': 'csit-block',
        'name': 'CSIT Block Library',
        'building': 'CSIT Department',
        'total_spots': 8,
        'admin_pin': '4444',
        'latitude': 30.2688125,
        'longitude': 77.9907376,
    },
    {
        'id': 'chanakya',
        'name': 'Chanakya Block Library',
        'building': 'Chanakya Block',
        'total_spots': 10,
        'admin_pin': '5555',
        'latitude': 30.2676875,
        'longitude': 77.9937376,
    },
)


def build_roster(entries: tuple[dict, ...] | List[dict] = DEFAULT_LIBRARY_ROSTER) -> List[Library]:
    """Fresh libraries with every seat free; rejects duplicate ids"""
    libraries = [
        Library.with_all_seats_free(**{k: v for k, v in entry.items() if k != 'available_spots'})
        for entry in entries
    ]
    ids = [library.id for library in libraries]
    if len(ids) != len(set(ids)):
        raise ValueError('Library roster contains duplicate ids')
    return libraries
