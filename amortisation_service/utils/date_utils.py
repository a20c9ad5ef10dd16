"""Date manipulation utilities"""

from datetime import date

from dateutil.relativedelta import relativedelta


def add_months(from_date: date, months: int) -> date:
    """
    Return the date ``months`` calendar months after ``from_date``.

    The day of month is clamped to the last valid day of the target month,
    so Jan 31 + 1 month gives Feb 28 (or Feb 29 in a leap year).
    """
    return from_date + relativedelta(months=months)
