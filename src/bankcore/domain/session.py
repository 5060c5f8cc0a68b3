"""Login session state."""

from decimal import Decimal
from enum import Enum
from typing import Optional

from bankcore.domain.errors import SessionStateError


class SessionRole(Enum):
    """Role of the current login."""

    NONE = "none"
    STANDARD = "standard"
    ADMIN = "admin"


class LimitKind(Enum):
    """Standard session operations with a cumulative per-login limit."""

    WITHDRAWAL = "withdrawal"
    TRANSFER = "transfer"
    PAYBILL = "paybill"


class Session:
    """State of one login, from login to logout.

    A session starts logged out. ``login_standard`` binds it to one holder
    name, ``login_admin`` grants unrestricted access. Running totals for
    each LimitKind start at zero on every login and are discarded on logout.
    """

    def __init__(self):
        self._role = SessionRole.NONE
        self._holder_name: Optional[str] = None
        self._totals: dict[LimitKind, Decimal] = {}
        self._reset_totals()

    @property
    def role(self) -> SessionRole:
        return self._role

    @property
    def is_logged_in(self) -> bool:
        return self._role is not SessionRole.NONE

    @property
    def is_admin(self) -> bool:
        return self._role is SessionRole.ADMIN

    @property
    def holder_name(self) -> Optional[str]:
        """Holder bound to a standard login, None otherwise."""
        return self._holder_name

    def login_standard(self, holder_name: str) -> None:
        """Start a standard session for ``holder_name``.

        Raises:
            SessionStateError: If a session is already active
        """
        self._require_logged_out()
        self._role = SessionRole.STANDARD
        self._holder_name = (holder_name or "").strip()
        self._reset_totals()

    def login_admin(self) -> None:
        """Start an admin session.

        Raises:
            SessionStateError: If a session is already active
        """
        self._require_logged_out()
        self._role = SessionRole.ADMIN
        self._holder_name = None
        self._reset_totals()

    def logout(self) -> None:
        """End the active session.

        Raises:
            SessionStateError: If no session is active
        """
        if not self.is_logged_in:
            raise SessionStateError("Not logged in")
        self._role = SessionRole.NONE
        self._holder_name = None
        self._reset_totals()

    def total(self, kind: LimitKind) -> Decimal:
        """Return the running total for ``kind`` in this login."""
        return self._totals[kind]

    def add_total(self, kind: LimitKind, amount: Decimal) -> None:
        self._totals[kind] += amount

    def _require_logged_out(self) -> None:
        if self.is_logged_in:
            raise SessionStateError("Already logged in, logout first")

    def _reset_totals(self) -> None:
        self._totals = {kind: Decimal("0.00") for kind in LimitKind}
