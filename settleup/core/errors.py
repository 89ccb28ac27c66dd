class LedgerError(Exception):
    """Base class for errors raised by the balance and settlement core."""

    code = "ledger_error"
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidGroupState(LedgerError):
    """Structural precondition violated, e.g. a group without members."""

    code = "invalid_group_state"
    status_code = 422


class UnknownMember(LedgerError):
    """An expense or settlement references someone outside the member list."""

    code = "unknown_member"
    status_code = 409

    def __init__(self, member_id: str, context: str = "expense"):
        super().__init__(f"{context} references unknown member {member_id!r}")
        self.member_id = member_id


class UnbalancedLedger(LedgerError):
    """Balances do not sum to zero, settlements would not be trustworthy."""

    code = "unbalanced_ledger"
    status_code = 409
