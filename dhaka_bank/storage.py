"""
Storage Backend Module

Provides an abstract storage interface with a JSON-file implementation
(persistence) and an in-memory one (testing), plus the AccountStore that
owns the loaded account list. All monetary values stored as Decimal strings.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterator, List, Optional, Union
from decimal import Decimal
import json
import os
import tempfile
import threading
from pathlib import Path
from contextlib import contextmanager

from .models import Account
from .logging_config import get_logger, log_action


logger = get_logger("dhaka_bank.storage")


class StorageBackend(ABC):
    """Abstract interface for whole-document storage backends"""

    @abstractmethod
    def read_all(self) -> List[Dict[str, Any]]:
        """Read every stored record; empty list if nothing is stored yet"""
        pass

    @abstractmethod
    def write_all(self, records: List[Dict[str, Any]]) -> None:
        """Replace the stored records with ``records``"""
        pass

    def close(self) -> None:
        """Release backend resources (default no-op)"""
        pass


class InMemoryStorage(StorageBackend):
    """In-memory storage implementation for testing"""

    def __init__(self):
        self._records: List[Dict[str, Any]] = []
        self._lock = threading.RLock()

    def read_all(self) -> List[Dict[str, Any]]:
        with self._lock:
            # Deep copy to prevent external mutation
            return json.loads(json.dumps(self._records), parse_float=Decimal)

    def write_all(self, records: List[Dict[str, Any]]) -> None:
        with self._lock:
            self._records = json.loads(json.dumps(records, default=str), parse_float=Decimal)


class JSONFileStorage(StorageBackend):
    """
    JSON document storage: one indented UTF-8 array of account objects.

    Every write rewrites the whole file. With ``atomic`` set, the document
    is written to a sibling temp file and renamed over the target.
    """

    def __init__(self, path: Union[str, Path], atomic: bool = True):
        self.path = Path(path)
        self.atomic = atomic

    def read_all(self) -> List[Dict[str, Any]]:
        if not self.path.exists():
            return []
        with open(self.path, "r", encoding="utf-8-sig") as fh:
            data = json.load(fh, parse_float=Decimal)
        if data is None:
            return []
        if not isinstance(data, list):
            raise ValueError(f"Expected a JSON array in {self.path}")
        return data

    def write_all(self, records: List[Dict[str, Any]]) -> None:
        document = json.dumps(records, indent=2, ensure_ascii=False, default=str)

        if not self.atomic:
            with open(self.path, "w", encoding="utf-8") as fh:
                fh.write(document)
            return

        directory = self.path.parent
        fd, tmp_path = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=str(directory)
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(document)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise


class AccountStore:
    """
    Owns the in-memory account list and its on-disk representation.

    ``load()`` and ``save()`` never raise on I/O or parse errors: a failed
    load leaves the store empty and a failed save leaves the file as it was.
    Both are logged.
    """

    def __init__(self, backend: StorageBackend):
        self.backend = backend
        self._accounts: List[Account] = []
        self._lock = threading.RLock()

    @contextmanager
    def locked(self) -> Iterator['AccountStore']:
        """Hold the store lock across a compound read-modify-save"""
        with self._lock:
            yield self

    def load(self) -> None:
        """Replace in-memory state with the stored accounts"""
        with self._lock:
            try:
                records = self.backend.read_all()
                accounts = [Account.from_dict(record) for record in records]
            except (OSError, ValueError, KeyError, TypeError, IndexError, ArithmeticError) as e:
                self._accounts = []
                log_action(
                    logger, "warning", f"Failed to load accounts: {e}",
                    action="load", path=self._location()
                )
                return

            self._accounts = accounts
            log_action(
                logger, "info", f"Loaded {len(accounts)} accounts",
                action="load", path=self._location()
            )

    def save(self) -> None:
        """Serialize the whole account list and overwrite storage"""
        with self._lock:
            try:
                self.backend.write_all([account.to_dict() for account in self._accounts])
            except (OSError, ValueError, TypeError) as e:
                log_action(
                    logger, "warning", f"Failed to save accounts: {e}",
                    action="save", path=self._location()
                )

    def add(self, account: Account) -> None:
        """Append an account and persist"""
        with self._lock:
            self._accounts.append(account)
            self.save()

    def accounts(self) -> List[Account]:
        """Snapshot of the account list"""
        with self._lock:
            return list(self._accounts)

    def find_by_username(self, username: str) -> Optional[Account]:
        """Case-insensitive lookup"""
        with self._lock:
            for account in self._accounts:
                if account.matches_username(username):
                    return account
            return None

    def count(self) -> int:
        with self._lock:
            return len(self._accounts)

    def close(self) -> None:
        self.backend.close()

    def _location(self) -> str:
        path = getattr(self.backend, "path", None)
        return str(path) if path else type(self.backend).__name__
