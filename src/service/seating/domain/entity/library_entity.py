from typing import Optional

import attrs

from src.service.seating.domain.enum.spot_status import SpotStatus


def _validate_non_empty_string(instance: object, attribute: attrs.Attribute, value: str) -> None:
    if not value or not value.strip():
        raise ValueError(f'Library {attribute.name} cannot be empty')


def _validate_total_spots(instance: object, attribute: attrs.Attribute, value: int) -> None:
    if value <= 0:
        raise ValueError('Library total_spots must be positive')


def _validate_available_spots(instance: 'Library', attribute: attrs.Attribute, value: int) -> None:
    if not 0 <= value <= instance.total_spots:
        raise ValueError(
            f'Library available_spots must be within [0, {instance.total_spots}], got {value}'
        )


@attrs.define(frozen=True)
class Library:
    """
    A library and its seat inventory.

    total_spots is fixed at creation; only the booking engine moves
    available_spots, and always through adjust_available.
    """

    id: str = attrs.field(validator=_validate_non_empty_string)
    name: str = attrs.field(validator=_validate_non_empty_string)
    building: str
    total_spots: int = attrs.field(validator=_validate_total_spots)
    available_spots: int = attrs.field(validator=_validate_available_spots)
    admin_pin: str = attrs.field(default='', repr=False)  # Hide from repr and logs
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @classmethod
    def with_all_seats_free(cls, **fields) -> 'Library':
        return cls(available_spots=fields['total_spots'], **fields)

    @property
    def held_spots(self) -> int:
        return self.total_spots - self.available_spots

    @property
    def has_free_seat(self) -> bool:
        return self.available_spots > 0

    def adjust_available(self, delta: int) -> 'Library':
        """Apply a seat delta clamped to [0, total_spots]"""
        clamped = max(0, min(self.total_spots, self.available_spots + delta))
        return attrs.evolve(self, available_spots=clamped)

    def spot_status(self, *, limited_threshold: int) -> SpotStatus:
        if self.available_spots == 0:
            return SpotStatus.FULL
        if self.available_spots <= limited_threshold:
            return SpotStatus.LIMITED
        return SpotStatus.AVAILABLE
