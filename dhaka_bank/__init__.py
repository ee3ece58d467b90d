"""
Dhaka Bank Console

A single-user console banking application. Accounts, balances and
transaction history are kept in a local JSON document, with all monetary
values handled as Decimal.
"""

__version__ = "1.0.0"
