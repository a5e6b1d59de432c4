import pytest

from loanledger.errors import (
    AlreadyReturned,
    CopyUnavailable,
    LedgerError,
    LoanNotFound,
)


def test_ledger_errors_are_value_errors():
    with pytest.raises(ValueError):
        raise LoanNotFound(3)


def test_copyunavailable_carries_copy_and_status():
    with pytest.raises(LedgerError) as e:
        raise CopyUnavailable(7, "damaged")
    assert e.value.copy_id == 7
    assert e.value.status == "damaged"
    assert str(e.value) == "Copy 7 is not available (status: damaged)"


def test_alreadyreturned_message():
    e = AlreadyReturned(4)
    assert e.loan_id == 4
    assert "already returned" in str(e)
