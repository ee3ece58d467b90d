"""
Account and Transaction Models

Plain dataclasses for the persisted records. Serialization uses the JSON
field names of the data file (camelCase); reading matches field names
case-insensitively so files written with PascalCase names still load.
"""

from decimal import Decimal
from datetime import datetime, timezone
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from enum import Enum
import uuid

from .currency import to_decimal


class TransactionType(Enum):
    """Types of balance-changing events"""
    DEPOSIT = "Deposit"
    WITHDRAWAL = "Withdrawal"

    @classmethod
    def parse(cls, value: Any) -> 'TransactionType':
        """Accept the enum name, its value, or the integer ordinal"""
        if isinstance(value, TransactionType):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            members = list(cls)
            if not 0 <= value < len(members):
                raise ValueError(f"Unknown transaction type: {value!r}")
            return members[value]
        text = str(value).strip()
        for member in cls:
            if text.lower() in (member.value.lower(), member.name.lower()):
                return member
        raise ValueError(f"Unknown transaction type: {value!r}")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _parse_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value)
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _lower_keys(data: Dict[str, Any]) -> Dict[str, Any]:
    return {str(key).lower(): value for key, value in data.items()}


@dataclass
class Transaction:
    """An immutable record of a deposit or withdrawal"""
    date: datetime
    type: TransactionType
    amount: Decimal
    note: Optional[str] = None

    def __post_init__(self):
        self.amount = to_decimal(self.amount)
        if not self.amount.is_finite() or self.amount <= 0:
            raise ValueError("Transaction amount must be positive and finite")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for storage"""
        return {
            "date": self.date.isoformat(),
            "type": self.type.value,
            "amount": str(self.amount),
            "note": self.note,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Transaction':
        """Create instance from dictionary"""
        data = _lower_keys(data)
        return cls(
            date=_parse_datetime(data["date"]),
            type=TransactionType.parse(data["type"]),
            amount=to_decimal(data["amount"]),
            note=data.get("note"),
        )


@dataclass
class Account:
    """
    A user's banking record: credentials, balance and history.

    The balance is not a hard invariant; it is only checked against the
    requested amount at withdrawal time.
    """
    username: str
    password_hash: str
    full_name: str = ""
    balance: Decimal = Decimal("0")
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=_utcnow)
    transactions: List[Transaction] = field(default_factory=list)

    def __post_init__(self):
        self.balance = to_decimal(self.balance)

    def matches_username(self, username: str) -> bool:
        """Case-insensitive username comparison"""
        return self.username.casefold() == username.casefold()

    @property
    def transaction_count(self) -> int:
        return len(self.transactions)

    def total_deposits(self) -> Decimal:
        """Sum of all deposit amounts"""
        return sum(
            (t.amount for t in self.transactions if t.type == TransactionType.DEPOSIT),
            Decimal("0")
        )

    def total_withdrawals(self) -> Decimal:
        """Sum of all withdrawal amounts"""
        return sum(
            (t.amount for t in self.transactions if t.type == TransactionType.WITHDRAWAL),
            Decimal("0")
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for storage"""
        return {
            "id": self.id,
            "username": self.username,
            "passwordHash": self.password_hash,
            "fullName": self.full_name,
            "balance": str(self.balance),
            "createdAt": self.created_at.isoformat(),
            "transactions": [t.to_dict() for t in self.transactions],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Account':
        """Create instance from dictionary"""
        data = _lower_keys(data)
        username = data["username"]
        password_hash = data["passwordhash"]
        if not isinstance(username, str) or not username:
            raise ValueError(f"Invalid username in account {data.get('id')!r}")
        if not isinstance(password_hash, str):
            raise ValueError(f"Invalid password hash in account {data.get('id')!r}")

        balance = to_decimal(data.get("balance", "0"))
        if not balance.is_finite():
            raise ValueError(f"Invalid balance in account {data.get('id')!r}")

        return cls(
            id=str(data["id"]),
            username=username,
            password_hash=password_hash,
            full_name=data.get("fullname") or "",
            balance=balance,
            created_at=_parse_datetime(data["createdat"]),
            transactions=[
                Transaction.from_dict(t) for t in (data.get("transactions") or [])
            ],
        )
