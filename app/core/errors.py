class AvailabilityError(Exception):
    """Validation failure raised at the availability boundary; mapped to HTTP 400."""

    code = "availability_error"
    status_code = 400


class InvalidDate(AvailabilityError):
    code = "invalid_date"


class InvalidTime(AvailabilityError):
    code = "invalid_time"


class UnknownRole(AvailabilityError):
    code = "unknown_role"


class InvalidDuration(AvailabilityError):
    code = "invalid_duration"


class InvalidDateRange(AvailabilityError):
    code = "invalid_date_range"


class OrganizationNotFound(AvailabilityError):
    code = "organization_not_found"
    status_code = 404
