class LedgerError(ValueError):
    """Base exception.

    Subclasses ValueError so callers that already guard ledger calls with
    ``except ValueError`` keep working.
    """


# *** lookup errors ***


class BookNotFound(LedgerError):
    def __init__(self, book_id):
        super().__init__(f"Book {book_id} not found")
        self.book_id = book_id


class CopyNotFound(LedgerError):
    def __init__(self, copy_id):
        super().__init__(f"Copy {copy_id} not found")
        self.copy_id = copy_id


class MemberNotFound(LedgerError):
    def __init__(self, member_id):
        super().__init__(f"Member {member_id} not found")
        self.member_id = member_id


class LoanNotFound(LedgerError):
    def __init__(self, loan_id):
        super().__init__(f"Loan {loan_id} not found")
        self.loan_id = loan_id


# *** business rule violations ***


class CopyUnavailable(LedgerError):
    """Raised when checking out a copy that is loaned or damaged."""

    def __init__(self, copy_id, status=None):
        msg = f"Copy {copy_id} is not available"
        if status:
            msg += f" (status: {status})"
        super().__init__(msg)
        self.copy_id = copy_id
        self.status = status


class AlreadyReturned(LedgerError):
    """Raised when returning a loan that is already closed."""

    def __init__(self, loan_id):
        super().__init__(f"Loan {loan_id} was already returned")
        self.loan_id = loan_id


class InvalidTimestamp(LedgerError):
    """Raised when a timestamp would break loan ordering (e.g. return before checkout)."""
