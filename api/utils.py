from fastapi import HTTPException, status
from logging import Logger
from typing import NoReturn

from Hotels.errors import (
    BookingConflict,
    DuplicateRoomNumber,
    HotelOSError,
    ReservationNotFound,
    RoomNotFound,
    ValidationError,
)

def _raise_http_error(exc: HotelOSError, logger: Logger) -> NoReturn:
    """Translate an inventory failure into an HTTPException:
    - validation errors -> 422 with one message per field
    - missing room or reservation -> 404
    - duplicate room number or booking conflict -> 409.
    """

    if isinstance(exc, ValidationError):
        logger.info("Rejected invalid form", extra={"fields": sorted(exc.errors)})
        raise HTTPException(
            status_code=422,
            detail={"message": "Invalid form data.", "errors": exc.errors},
        ) from exc
    if isinstance(exc, (RoomNotFound, ReservationNotFound)):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc
    if isinstance(exc, DuplicateRoomNumber):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"message": str(exc), "errors": {"number": str(exc)}},
        ) from exc
    if isinstance(exc, BookingConflict):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={
                "message": str(exc),
                "errors": {"room_number": str(exc)},
                "conflicting_reservation": exc.conflicting.to_dict(),
            },
        ) from exc

    logger.exception("Unhandled inventory failure")
    raise HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Unable to complete the operation due to an internal error.",
    ) from exc
