"""Application layer DTOs"""

from src.service.seating.app.dto.booking_history import BookingHistory
from src.service.seating.app.dto.library_listing import CampusStats, LibraryListing, LibraryOccupancy
from src.service.seating.app.dto.store_read import StoreRead

__all__ = [
    'BookingHistory',
    'CampusStats',
    'LibraryListing',
    'LibraryOccupancy',
    'StoreRead',
]
