from datetime import datetime

from congregation.shared_kernel import error_codes
from congregation.shared_kernel.result import Error, Result, Return


def validate_event_dates(start_date: datetime, end_date: datetime) -> Result[None]:
    if end_date <= start_date:
        return Return.err(
            Error(error_codes.INVALID_ARGUMENT, "End date must be after start date")
        )
    return Return.ok()
