"""Record types stored in the JSON collections."""

from weeklydraw.models.draw_record import DrawRecord
from weeklydraw.models.prize_counter import PrizeCounter
from weeklydraw.models.reservation import Reservation

__all__ = ["DrawRecord", "PrizeCounter", "Reservation"]
