import logging
from typing import List, Optional

from boarding.bookings import Booking

LOG = logging.getLogger(__name__)


class BoardingState:
    """
    Holds the bookings of the latest upload and their boarding order.

    Each upload takes a generation token from begin_upload(); commit() only
    lands results whose token is the newest one handed out, so a slow parse
    of an older file can never overwrite a newer upload.
    """

    def __init__(self):
        self._generation = 0
        self._bookings: List[Booking] = []
        self._order: List[Booking] = []
        self.source_name: Optional[str] = None

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def bookings(self) -> List[Booking]:
        return list(self._bookings)

    @property
    def order(self) -> List[Booking]:
        return list(self._order)

    def begin_upload(self) -> int:
        self._generation += 1
        return self._generation

    def commit(self, token: int, bookings: List[Booking], order: List[Booking], source_name=None) -> bool:
        if token != self._generation:
            LOG.info("Discarding stale upload result (token %s, current %s)", token, self._generation)
            return False
        # replace both slots together
        self._bookings, self._order = list(bookings), list(order)
        self.source_name = source_name
        return True

    def clear(self):
        self._generation += 1
        self._bookings, self._order = [], []
        self.source_name = None
