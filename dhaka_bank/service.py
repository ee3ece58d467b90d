"""
Bank Service Module

Account creation, authentication, deposits and withdrawals on top of an
AccountStore. Every successful mutation rewrites the whole store.
"""

from decimal import Decimal, InvalidOperation
from datetime import datetime, timezone
from typing import Any, List, Optional, Union

from .currency import to_decimal
from .models import Account, Transaction, TransactionType
from .passwords import hash_password, verify_password
from .storage import AccountStore
from .logging_config import get_logger, log_action


AmountLike = Union[Decimal, int, str]


def _valid_amount(amount: Any) -> Optional[Decimal]:
    """Coerce to a finite, positive Decimal, or None"""
    try:
        value = to_decimal(amount)
    except (InvalidOperation, ValueError, TypeError):
        return None
    if not value.is_finite() or value <= 0:
        return None
    return value


class BankService:
    """
    Operations over the account store.

    Failures are reported by return value: ``None`` from
    ``create_account``/``authenticate``, ``False`` from
    ``deposit``/``withdraw``.
    """

    def __init__(self, store: AccountStore, password_scheme: str = "scrypt"):
        self.store = store
        self.password_scheme = password_scheme
        self.logger = get_logger("dhaka_bank.service")

    @property
    def accounts(self) -> List[Account]:
        return self.store.accounts()

    def create_account(self, username: str, password: str, full_name: str) -> Optional[Account]:
        """
        Create a new account with a zero balance

        Args:
            username: Login name, unique ignoring case
            password: Plain-text password (only its hash is kept)
            full_name: Display name

        Returns:
            Created Account, or None if the username is taken
        """
        with self.store.locked():
            if self.store.find_by_username(username) is not None:
                log_action(
                    self.logger, "info", "Account creation rejected: username taken",
                    action="create_account", username=username
                )
                return None

            account = Account(
                username=username,
                password_hash=hash_password(password, self.password_scheme),
                full_name=full_name,
                balance=Decimal("0"),
                created_at=datetime.now(timezone.utc),
            )
            self.store.add(account)

        log_action(self.logger, "info", "Account created", action="create_account", account=account)
        return account

    def authenticate(self, username: str, password: str) -> Optional[Account]:
        """
        Return the first account matching both username and password, else None.

        Uniqueness is only enforced at creation, so a loaded file may hold
        several case variants of one username; each is checked in order.
        """
        for account in self.store.accounts():
            if account.matches_username(username) and verify_password(password, account.password_hash):
                log_action(
                    self.logger, "info", "User authenticated successfully",
                    action="authenticate", account=account
                )
                return account

        log_action(
            self.logger, "warning", "Authentication failed",
            action="authenticate", username=username
        )
        return None

    def deposit(self, account: Account, amount: AmountLike, note: Optional[str] = None) -> bool:
        """Credit ``amount`` to the account; rejects non-positive or non-finite amounts"""
        value = _valid_amount(amount)
        if value is None:
            self._log_rejected("deposit", account, amount, "invalid amount")
            return False

        with self.store.locked():
            account.balance += value
            account.transactions.append(Transaction(
                date=datetime.now(timezone.utc),
                type=TransactionType.DEPOSIT,
                amount=value,
                note=note,
            ))
            self.store.save()

        log_action(self.logger, "info", "Deposit posted", action="deposit", account=account, amount=value)
        return True

    def withdraw(self, account: Account, amount: AmountLike, note: Optional[str] = None) -> bool:
        """Debit ``amount`` from the account; rejects invalid amounts and overdrafts"""
        value = _valid_amount(amount)
        if value is None:
            self._log_rejected("withdraw", account, amount, "invalid amount")
            return False

        with self.store.locked():
            if account.balance < value:
                self._log_rejected("withdraw", account, value, "insufficient funds")
                return False

            account.balance -= value
            account.transactions.append(Transaction(
                date=datetime.now(timezone.utc),
                type=TransactionType.WITHDRAWAL,
                amount=value,
                note=note,
            ))
            self.store.save()

        log_action(self.logger, "info", "Withdrawal posted", action="withdraw", account=account, amount=value)
        return True

    def get_by_username(self, username: str) -> Optional[Account]:
        """Case-insensitive lookup"""
        return self.store.find_by_username(username)

    def _log_rejected(self, action: str, account: Account, amount: Any, reason: str) -> None:
        log_action(
            self.logger, "info", f"{action.capitalize()} rejected: {reason}",
            action=action, account=account, amount=amount
        )
