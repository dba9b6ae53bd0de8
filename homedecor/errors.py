"""
Erreurs applicatives exposées aux clients HTTP.
Chaque erreur porte son code HTTP et un message; le handler global
(homedecor.app_setup.exceptions) les rend en {"success": false, "message": ...}.
"""


class AppError(Exception):
    status_code = 500
    default_message = "Internal error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequest(AppError):
    status_code = 400
    default_message = "Bad request"


class NotFound(AppError):
    status_code = 404
    default_message = "Not found"


class PaymentNotCompleted(AppError):
    status_code = 400
    default_message = "Payment not completed"


class PaymentProviderError(AppError):
    status_code = 502
    default_message = "Payment provider request failed"


class ProcessingFailed(AppError):
    status_code = 500
    default_message = "Payment processing failed"
