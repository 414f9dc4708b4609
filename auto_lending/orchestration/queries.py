"""Read-only lookups of ledger-held vehicle records"""

import logging

from auto_lending.domain.catalog import vehicle_resource_type
from auto_lending.domain.exceptions import LedgerAPIError, NotFound
from auto_lending.domain.models import Vehicle
from auto_lending.infrastructure.observability.metrics import vehicle_fetch_counter
from auto_lending.orchestration.ports import LedgerPort

logger = logging.getLogger(__name__)


def parse_vehicle(data: dict) -> Vehicle:
    """Ledger JSON carries u64 fields as strings"""
    return Vehicle(
        id=int(data["id"]),
        dealer=str(data["dealer"]),
        price=int(data["price"]),
        is_sold=bool(data["is_sold"]),
    )


class ResourceQueryService:
    """One Vehicle slot per dealer account; no enumeration beyond that"""

    def __init__(self, ledger: LedgerPort):
        self.ledger = ledger
        self.resource_type = vehicle_resource_type()

    async def fetch_vehicle(self, dealer_address: str) -> Vehicle:
        """
        Read the Vehicle resource stored at a dealer's address.

        Raises:
            NotFound: No resource, or the read failed for any reason; the
                caller shows an empty list either way
        """
        try:
            data = await self.ledger.get_account_resource(dealer_address, self.resource_type)
            vehicle = parse_vehicle(data)
        except NotFound:
            vehicle_fetch_counter.labels(result="not_found").inc()
            raise
        except (LedgerAPIError, KeyError, ValueError, TypeError) as e:
            vehicle_fetch_counter.labels(result="not_found").inc()
            logger.warning(f"Vehicle read failed: {e}", extra={"dealer_address": dealer_address})
            raise NotFound(f"No vehicles found at {dealer_address}") from e

        vehicle_fetch_counter.labels(result="found").inc()
        return vehicle
