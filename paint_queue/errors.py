# paint_queue/errors.py
from typing import Optional


class AppError(Exception):
    """Base for every error surfaced to API callers as ``{"error": message}``."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


# Validation (400)

class ValidationError(AppError):
    status_code = 400
    default_message = "Invalid request"


class InvalidStatus(ValidationError):
    default_message = "Invalid status value."


class MissingColourCode(ValidationError):
    default_message = "Colour code is required when status is Ready."


class MissingAssignee(ValidationError):
    default_message = "An employee must be assigned for this status."


class MissingReason(ValidationError):
    default_message = "A reason is required to delete an order."


class MissingField(ValidationError):
    default_message = "Missing required field."


class InvalidPoType(ValidationError):
    default_message = "PO type must be Nexa or Carvello for paid orders."


class InvalidDate(ValidationError):
    default_message = "Invalid date format. Use YYYY-MM-DD."


class InvalidDateRange(ValidationError):
    default_message = "start_date cannot be after end_date."


class InvalidStateForDeletion(ValidationError):
    default_message = "Only Waiting, Mixing, Spraying or Re-Mixing orders can be deleted."


class InvalidTransition(ValidationError):
    default_message = "Status transition not allowed."


# Authorization (403)

class Forbidden(AppError):
    status_code = 403
    default_message = "Only Admin users can perform this action."


# Missing rows (404)

class NotFound(AppError):
    status_code = 404
    default_message = "Not found"


class OrderNotFound(NotFound):
    default_message = "Order not found"


class EmployeeNotFound(NotFound):
    default_message = "Employee not found"


# Unique constraints

class Conflict(AppError):
    status_code = 400
    default_message = "Duplicate record"


class DuplicateOrder(Conflict):
    default_message = "Transaction ID already exists"


class DuplicateEmployee(Conflict):
    default_message = "Employee code already exists"


# Datastore (500)

class InternalError(AppError):
    status_code = 500


class DatastoreError(InternalError):
    default_message = "Database error"
