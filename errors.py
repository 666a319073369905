"""
Error types raised by the domain operations.

Each class carries the HTTP status the API answers with; main.py turns any
of them into a ``{"message": ...}`` JSON body.
"""


class AgriVentureError(Exception):
    status_code = 500
    default_message = "Something went wrong"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AgriVentureError):
    status_code = 400
    default_message = "Invalid input data"


class DomainPreconditionError(AgriVentureError):
    status_code = 400
    default_message = "Operation not allowed in the current state"


class NotFoundError(AgriVentureError):
    status_code = 404
    default_message = "Not found"


# ----------------------
# Farm
# ----------------------

class InvalidCropOrPlot(DomainPreconditionError):
    default_message = "Plot already has a crop"


class CropNotReady(DomainPreconditionError):
    default_message = "Crop not ready for harvest"


# ----------------------
# Learning
# ----------------------

class AlreadyStarted(DomainPreconditionError):
    default_message = "Module already started"


class AlreadyCompleted(DomainPreconditionError):
    default_message = "Module already completed"


class ModuleNotFoundOrNotStarted(NotFoundError):
    default_message = "Module or progress not found"


# ----------------------
# Marketplace
# ----------------------

class OutOfStock(DomainPreconditionError):
    default_message = "Equipment out of stock"


class InsufficientCredits(DomainPreconditionError):
    default_message = "Insufficient credits"


# ----------------------
# Users
# ----------------------

class UsernameTaken(DomainPreconditionError):
    default_message = "Username already taken"
