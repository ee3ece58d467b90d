"""
Interactive Console Module

Menu-driven front end over BankService. Input and output functions are
injectable so sessions can be scripted.
"""

from getpass import getpass
from typing import Callable, Optional

from .currency import format_amount, parse_amount
from .models import Account
from .service import BankService


BANNER = "=== DHAKA BANK ==="
DATE_FORMAT = "%Y-%m-%d %H:%M:%SZ"


class BankConsole:
    """Interactive session: logged-out menu, then account menu after login"""

    def __init__(
        self,
        service: BankService,
        currency_code: str = "USD",
        input_func: Callable[[str], str] = input,
        password_func: Callable[[str], str] = getpass,
        output: Callable[..., None] = print
    ):
        self.service = service
        self.currency_code = currency_code
        self._input = input_func
        self._password = password_func
        self._print = output
        self.current: Optional[Account] = None

    def run(self) -> None:
        """Loop until Exit is chosen or input ends"""
        try:
            while True:
                if self.current is None:
                    if not self._logged_out_menu():
                        break
                else:
                    self._account_menu()
        except (EOFError, KeyboardInterrupt):
            self._print()

        self._print("Goodbye!")

    def _logged_out_menu(self) -> bool:
        self._print()
        self._print(BANNER)
        self._print("1) Create account")
        self._print("2) Login")
        self._print("3) Exit")
        choice = self._input("Choose: ").strip()

        if choice == "1":
            self.create_account()
        elif choice == "2":
            self.current = self.login()
        elif choice == "3":
            return False
        return True

    def _account_menu(self) -> None:
        account = self.current
        self._print()
        self._print(
            f"Logged in: {account.username} ({account.full_name}) - "
            f"Balance: {self._money(account.balance)}"
        )
        self._print("1) Deposit")
        self._print("2) Withdraw")
        self._print("3) Check balance")
        self._print("4) Display account details")
        self._print("5) Transaction history")
        self._print("6) Logout")
        choice = self._input("Choose: ").strip()

        actions = {
            "1": self.deposit,
            "2": self.withdraw,
            "3": self.check_balance,
            "4": self.display_details,
            "5": self.show_history,
        }
        if choice == "6":
            self.current = None
        elif choice in actions:
            actions[choice]()

    def create_account(self) -> Optional[Account]:
        full_name = self._input("Full name: ").strip()
        username = self._input("Username: ").strip()
        password = self._password("Password: ")

        if not username or not password.strip():
            self._print("Username and password cannot be empty.")
            return None

        account = self.service.create_account(username, password, full_name)
        if account is None:
            self._print("Username already exists.")
        else:
            self._print(f"Account created. Welcome, {account.full_name}!")
        return account

    def login(self) -> Optional[Account]:
        username = self._input("Username: ").strip()
        password = self._password("Password: ")

        account = self.service.authenticate(username, password)
        if account is None:
            self._print("Invalid credentials.")
        return account

    def deposit(self) -> None:
        amount = parse_amount(self._input("Amount to deposit: "))
        if amount is None:
            self._print("Invalid amount.")
            return
        note = self._read_note()
        ok = self.service.deposit(self.current, amount, note)
        self._print("Deposit successful." if ok else "Deposit failed.")

    def withdraw(self) -> None:
        amount = parse_amount(self._input("Amount to withdraw: "))
        if amount is None:
            self._print("Invalid amount.")
            return
        note = self._read_note()
        ok = self.service.withdraw(self.current, amount, note)
        self._print("Withdrawal successful." if ok else "Insufficient funds or invalid amount.")

    def check_balance(self) -> None:
        self._print(f"Current balance: {self._money(self.current.balance)}")

    def display_details(self) -> None:
        account = self.current
        self._print("--- Account Details ---")
        self._print(f"ID: {account.id}")
        self._print(f"Username: {account.username}")
        self._print(f"Full name: {account.full_name}")
        self._print(f"Created: {account.created_at.strftime(DATE_FORMAT)}")
        self._print(f"Balance: {self._money(account.balance)}")
        self._print(f"Transactions: {account.transaction_count}")
        self._print(f"Total deposited: {self._money(account.total_deposits())}")
        self._print(f"Total withdrawn: {self._money(account.total_withdrawals())}")

    def show_history(self) -> None:
        self._print("--- Transactions ---")
        if not self.current.transactions:
            self._print("No transactions yet.")
            return
        for t in self.current.transactions:
            self._print(
                f"{t.date.strftime(DATE_FORMAT)} | {t.type.value} | "
                f"{self._money(t.amount)} | {t.note or ''}"
            )

    def _read_note(self) -> Optional[str]:
        note = self._input("Note (optional): ").strip()
        return note or None

    def _money(self, amount) -> str:
        return format_amount(amount, self.currency_code)
