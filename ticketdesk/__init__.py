"""TicketDesk - ticket, station and collection records with paged list views."""

__version__ = "0.1.0"
