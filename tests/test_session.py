"""Tests for the login session state machine."""

from decimal import Decimal

import pytest

from bankcore.domain.errors import SessionStateError
from bankcore.domain.session import LimitKind, Session, SessionRole


def test_new_session_is_logged_out():
    """Test a new session starts logged out."""
    session = Session()
    assert not session.is_logged_in
    assert not session.is_admin
    assert session.role is SessionRole.NONE
    assert session.holder_name is None


def test_login_standard():
    """Test a standard login."""
    session = Session()
    session.login_standard("  Alice ")
    assert session.is_logged_in
    assert not session.is_admin
    assert session.role is SessionRole.STANDARD
    assert session.holder_name == "Alice"


def test_login_admin():
    """Test an admin login."""
    session = Session()
    session.login_admin()
    assert session.is_logged_in
    assert session.is_admin
    assert session.holder_name is None


@pytest.mark.parametrize("first", ["standard", "admin"])
@pytest.mark.parametrize("second", ["standard", "admin"])
def test_second_login_rejected(first, second):
    """Test login is only valid from the logged-out state."""
    session = Session()
    if first == "admin":
        session.login_admin()
    else:
        session.login_standard("Alice")

    with pytest.raises(SessionStateError):
        if second == "admin":
            session.login_admin()
        else:
            session.login_standard("Bob")


def test_logout_clears_identity():
    """Test logout clears the role and holder."""
    session = Session()
    session.login_standard("Alice")
    session.logout()
    assert not session.is_logged_in
    assert session.holder_name is None
    assert session.role is SessionRole.NONE


def test_logout_when_logged_out_rejected():
    """Test logging out twice is rejected."""
    with pytest.raises(SessionStateError):
        Session().logout()


def test_totals_start_at_zero():
    """Test session totals start at zero."""
    session = Session()
    session.login_standard("Alice")
    for kind in LimitKind:
        assert session.total(kind) == Decimal("0")


def test_add_total_is_per_kind():
    """Test totals are kept per operation kind."""
    session = Session()
    session.login_standard("Alice")
    session.add_total(LimitKind.WITHDRAWAL, Decimal("100.00"))
    session.add_total(LimitKind.WITHDRAWAL, Decimal("50.00"))
    session.add_total(LimitKind.PAYBILL, Decimal("20.00"))
    assert session.total(LimitKind.WITHDRAWAL) == Decimal("150.00")
    assert session.total(LimitKind.PAYBILL) == Decimal("20.00")
    assert session.total(LimitKind.TRANSFER) == Decimal("0")


def test_totals_reset_across_logins():
    """Test totals never carry over a logout/login boundary."""
    session = Session()
    session.login_standard("Alice")
    session.add_total(LimitKind.TRANSFER, Decimal("900.00"))
    session.logout()
    assert session.total(LimitKind.TRANSFER) == Decimal("0")

    session.login_standard("Alice")
    assert session.total(LimitKind.TRANSFER) == Decimal("0")
