"""Calendar month helpers"""

import calendar
from datetime import datetime, time
from typing import Tuple


def shift_months(moment: datetime, months: int) -> datetime:
    """Move a datetime by whole calendar months, clamping the day to the target month length"""
    month_index = moment.year * 12 + (moment.month - 1) + months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def month_bounds(moment: datetime) -> Tuple[datetime, datetime]:
    """Inclusive [start, end] of the calendar month containing moment"""
    last_day = calendar.monthrange(moment.year, moment.month)[1]
    start = datetime.combine(moment.date().replace(day=1), time.min)
    end = datetime.combine(moment.date().replace(day=last_day), time.max)
    return start, end


def month_label(moment: datetime) -> str:
    """Short month + year label, e.g. 'Jan 2025'"""
    return moment.strftime("%b %Y")
