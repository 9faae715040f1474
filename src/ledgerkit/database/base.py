"""Abstract database interface."""

from abc import ABC, abstractmethod

from ledgerkit.domain.entities import LedgerState


class Database(ABC):
    """Abstract persistence interface for ledgerkit.

    The core only needs to load the whole ledger at startup and hand the
    whole ledger back after mutations.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def load_state(self) -> LedgerState:
        """Load every stored entity."""
        pass

    @abstractmethod
    def save_state(self, state: LedgerState) -> None:
        """Replace the stored entities with the given state."""
        pass
