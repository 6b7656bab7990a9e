"""Web services wrapping the aggregation engine."""

from swapintents.web.services.quote_service import QuoteService

__all__ = ["QuoteService"]
