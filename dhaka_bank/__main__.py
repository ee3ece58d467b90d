#!/usr/bin/env python3
"""Main entry point for the Dhaka Bank console"""

from .cli import BankConsole
from .config import get_config
from .logging_config import setup_logging
from .service import BankService
from .storage import AccountStore, JSONFileStorage


def build_service(config=None) -> BankService:
    """Wire storage and service from configuration and load existing accounts"""
    config = config or get_config()
    store = AccountStore(JSONFileStorage(config.data_file, atomic=config.atomic_writes))
    store.load()
    return BankService(store, password_scheme=config.password_scheme)


def main() -> None:
    """Start an interactive session"""
    config = get_config()
    setup_logging(
        level=config.log_level,
        log_format=config.log_format,
        log_file=config.log_file
    )

    service = build_service(config)
    try:
        BankConsole(service, currency_code=config.currency_code).run()
    finally:
        service.store.close()


if __name__ == "__main__":
    main()
