"""
Erreurs métier levées par les services.
Chaque classe porte le code HTTP renvoyé par le handler de l'application ({"error": message}).
"""


class StarDeskError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(StarDeskError):
    status_code = 400


class InsufficientFunds(StarDeskError):
    status_code = 400


class PreconditionFailed(StarDeskError):
    status_code = 400


class Unauthenticated(StarDeskError):
    status_code = 401


class Forbidden(StarDeskError):
    status_code = 403


class NotFound(StarDeskError):
    status_code = 404


class Conflict(StarDeskError):
    status_code = 409
