"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.seating.app.command import (
    admin_release_seats_use_case,
    create_booking_use_case,
    handle_scan_use_case,
    reset_local_data_use_case,
    save_student_profile_use_case,
)
from src.service.seating.app.query import (
    authorize_admin_use_case,
    get_student_profile_use_case,
    list_bookings_use_case,
    list_libraries_use_case,
    list_library_occupancy_use_case,
)
from src.service.seating.driving_adapter.http_controller import (
    admin_controller,
    booking_controller,
)


WIRE_MODULES: list[ModuleType] = [
    create_booking_use_case,
    handle_scan_use_case,
    admin_release_seats_use_case,
    save_student_profile_use_case,
    reset_local_data_use_case,
    list_libraries_use_case,
    list_bookings_use_case,
    get_student_profile_use_case,
    authorize_admin_use_case,
    list_library_occupancy_use_case,
    booking_controller,
    admin_controller,
]
