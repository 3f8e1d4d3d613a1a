class BoardingError(ValueError):
    """Base class for recoverable problems with an uploaded bookings file."""


class IngestError(BoardingError):
    pass


class MissingColumn(BoardingError):
    def __init__(self, column: str, found=None):
        self.column = column
        self.found = [] if found is None else list(found)
        msg = f"Required column '{column}' not found"
        if self.found:
            msg += f"; found: {self.found}"
        super().__init__(msg)


def _row_suffix(row_number):
    return f" (row {row_number})" if row_number is not None else ""


class InvalidSeatLabel(BoardingError):
    def __init__(self, label: str, row_number=None, booking_id=None):
        self.label = label
        self.row_number = row_number
        self.booking_id = booking_id
        who = f" for booking {booking_id}" if booking_id is not None else ""
        super().__init__(f"Seat label {label!r} has no seat number{who}{_row_suffix(row_number)}")


class InvalidBookingId(BoardingError):
    def __init__(self, text: str, row_number=None):
        self.text = text
        self.row_number = row_number
        super().__init__(f"Booking_ID {text!r} is not an integer{_row_suffix(row_number)}")


class EmptySeatList(BoardingError):
    def __init__(self, booking_id=None, row_number=None):
        self.booking_id = booking_id
        self.row_number = row_number
        super().__init__(f"Booking {booking_id} lists no seats{_row_suffix(row_number)}")


class DuplicateBookingId(BoardingError):
    def __init__(self, booking_id: int, row_numbers):
        self.booking_id = booking_id
        self.row_numbers = list(row_numbers)
        rows = ", ".join(str(r) for r in self.row_numbers)
        super().__init__(f"Booking_ID {booking_id} appears more than once (rows {rows})")


class InvalidBookingData(BoardingError):
    """Raised in strict mode when one or more rows failed to normalize."""

    def __init__(self, errors):
        self.errors = list(errors)
        lines = [str(e.error) for e in self.errors]
        super().__init__(f"{len(lines)} invalid row(s): " + "; ".join(lines))
