"""Vehicle view-state and its invalidation policy"""

from dataclasses import dataclass, field
from typing import List, Optional

from auto_lending.domain.catalog import APPLY_FOR_LOAN, LIST_VEHICLE
from auto_lending.domain.models import Vehicle

# Commands whose success can change some dealer's Vehicle resource
VEHICLE_MUTATIONS = frozenset({LIST_VEHICLE, APPLY_FOR_LOAN})


def _same_address(a: Optional[str], b: Optional[str]) -> bool:
    return bool(a) and bool(b) and a.strip().lower() == b.strip().lower()


def refresh_target(
    command_name: str,
    acting_address: Optional[str],
    displayed_address: Optional[str],
) -> Optional[str]:
    """
    Decide which dealer address to re-fetch after a successful command.

    Conservative rule: a false-positive refresh is fine, a stale display is not.
    - list_vehicle writes the signer's own resource, so refresh when the
      signer is the dealer on display.
    - apply_for_loan may flip is_sold on any dealer's vehicle, so refresh
      whatever is on display.
    - Everything else never touches vehicles.

    Returns:
        Address to re-fetch, or None when the cache is still valid
    """
    if command_name not in VEHICLE_MUTATIONS or not displayed_address:
        return None
    if command_name == LIST_VEHICLE and not _same_address(acting_address, displayed_address):
        return None
    return displayed_address


@dataclass
class VehicleView:
    """Cached vehicle list for the dealer address currently on display"""

    displayed_address: Optional[str] = None
    vehicles: List[Vehicle] = field(default_factory=list)

    def show(self, address: str, vehicle: Optional[Vehicle]) -> None:
        """Replace the cache with the result of a fresh query"""
        self.displayed_address = address
        self.vehicles = [vehicle] if vehicle is not None else []

    def clear(self) -> None:
        self.displayed_address = None
        self.vehicles = []
