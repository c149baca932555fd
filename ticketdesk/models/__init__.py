"""Record types shown by the list views."""

from .collection import TicketCollection
from .station import Station
from .ticket import Ticket

__all__ = ["Ticket", "Station", "TicketCollection"]
