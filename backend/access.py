# Access control - admin identity and the accepting-submissions flag
import logging
import threading

from models import Unauthorized

logger = logging.getLogger(__name__)


class AccessController:
    """Holds the single admin identity and gates whether submissions are accepted."""

    def __init__(self, admin: str, accepting: bool = True):
        self._admin = admin
        self._accepting = accepting
        # Shared with the ledger so a toggle never lands inside an append
        self.lock = threading.RLock()

    @property
    def admin(self) -> str:
        return self._admin

    @property
    def accepting_submissions(self) -> bool:
        return self._accepting

    def check_accepting(self) -> bool:
        """Predicate consulted before every submission. Never raises."""
        return self._accepting

    def toggle_accepting(self, caller: str) -> bool:
        """Flip the accepting flag. Only the admin may do this. Returns the new value."""
        if caller != self._admin:
            logger.warning("Refused accepting toggle from non-admin %r", caller)
            raise Unauthorized(caller)
        with self.lock:
            self._accepting = not self._accepting
            accepting = self._accepting
        logger.info("Accepting submissions set to %s", accepting)
        return accepting
