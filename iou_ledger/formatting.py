"""Display formatting for amounts, dates and borrower reminders."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable

from iou_ledger.engine.accrual import monthly_interest_amount
from iou_ledger.engine.balance import outstanding_interest, outstanding_principal
from iou_ledger.engine.status import accrual_cutoff
from iou_ledger.models import Loan, Payment, parse_timestamp


@dataclass(frozen=True)
class Currency:
    """Display currency."""

    code: str  # ISO 4217
    symbol: str
    name: str


CURRENCIES: tuple[Currency, ...] = (
    Currency("USD", "$", "US Dollar"),
    Currency("EUR", "€", "Euro"),
    Currency("GBP", "£", "British Pound"),
    Currency("JPY", "¥", "Japanese Yen"),
    Currency("CNY", "¥", "Chinese Yuan"),
    Currency("INR", "₹", "Indian Rupee"),
    Currency("AUD", "A$", "Australian Dollar"),
    Currency("CAD", "C$", "Canadian Dollar"),
    Currency("CHF", "Fr", "Swiss Franc"),
    Currency("SEK", "kr", "Swedish Krona"),
    Currency("NZD", "NZ$", "New Zealand Dollar"),
    Currency("KRW", "₩", "South Korean Won"),
    Currency("SGD", "S$", "Singapore Dollar"),
    Currency("NOK", "kr", "Norwegian Krone"),
    Currency("MXN", "$", "Mexican Peso"),
    Currency("ZAR", "R", "South African Rand"),
    Currency("BRL", "R$", "Brazilian Real"),
    Currency("RUB", "₽", "Russian Ruble"),
    Currency("TRY", "₺", "Turkish Lira"),
    Currency("HKD", "HK$", "Hong Kong Dollar"),
    Currency("IDR", "Rp", "Indonesian Rupiah"),
    Currency("THB", "฿", "Thai Baht"),
    Currency("MYR", "RM", "Malaysian Ringgit"),
    Currency("PHP", "₱", "Philippine Peso"),
    Currency("PLN", "zł", "Polish Zloty"),
    Currency("DKK", "kr", "Danish Krone"),
    Currency("CZK", "Kč", "Czech Koruna"),
    Currency("HUF", "Ft", "Hungarian Forint"),
    Currency("ILS", "₪", "Israeli Shekel"),
    Currency("AED", "د.إ", "UAE Dirham"),
    Currency("SAR", "﷼", "Saudi Riyal"),
    Currency("ARS", "$", "Argentine Peso"),
    Currency("CLP", "$", "Chilean Peso"),
    Currency("COP", "$", "Colombian Peso"),
    Currency("EGP", "£", "Egyptian Pound"),
    Currency("PKR", "₨", "Pakistani Rupee"),
    Currency("BDT", "৳", "Bangladeshi Taka"),
    Currency("VND", "₫", "Vietnamese Dong"),
    Currency("NGN", "₦", "Nigerian Naira"),
    Currency("UAH", "₴", "Ukrainian Hryvnia"),
    Currency("RON", "lei", "Romanian Leu"),
)

DEFAULT_CURRENCY_CODE = "EUR"


def get_currency_by_code(code: str) -> Currency | None:
    """Look up a currency by ISO code (case-insensitive)."""
    code = code.upper()
    for currency in CURRENCIES:
        if currency.code == code:
            return currency
    return None


def default_currency() -> Currency:
    """Return the default display currency (EUR)."""
    return get_currency_by_code(DEFAULT_CURRENCY_CODE) or CURRENCIES[0]


def format_currency(amount: int, symbol: str = "€") -> str:
    """Format a whole-unit amount for display, e.g. ``€1,250.00``."""
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


def format_date(value: datetime | date | str) -> str:
    """Format a date for display, e.g. ``Jan 5, 2024``.

    Parameters
    ----------
    value : datetime | date | str
        A date, datetime or ISO-8601 string.

    Returns
    -------
    str
        Short month name, day without padding, four-digit year.
    """
    if isinstance(value, str):
        value = parse_timestamp(value)
    return f"{value:%b} {value.day}, {value.year}"


def build_reminder_message(
    loan: Loan,
    payments: Iterable[Payment],
    symbol: str = "€",
    now: datetime | None = None,
) -> str:
    """Build the reminder text sent to a borrower.

    All figures come from the balance engine so the reminder matches
    what the ledger shows.
    """
    payments = list(payments)
    loan_outstanding = outstanding_principal(loan, payments)
    interest_outstanding = outstanding_interest(loan, payments, accrual_cutoff(loan, now))
    monthly_interest = monthly_interest_amount(loan.amount, loan.interest_rate)

    return (
        f"Hi {loan.borrower_name},\n\n"
        "Here's your loan summary:\n"
        f"• Loan Outstanding: {format_currency(loan_outstanding, symbol)}\n"
        f"• Interest Outstanding: {format_currency(interest_outstanding, symbol)}\n"
        f"• Monthly Interest: {format_currency(monthly_interest, symbol)}\n\n"
        "Please make your payment. Thank you!"
    )
