"""
Erreurs métier de l'API.
Chaque erreur porte son code HTTP; le handler de fithub.app_setup.exceptions
les traduit en JSON {"error": true, "message": ...}.
"""

class ServiceError(Exception):
    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

class UnauthenticatedError(ServiceError):
    status_code = 401

class ForbiddenError(ServiceError):
    status_code = 403

class NotFoundError(ServiceError):
    status_code = 404

class ValidationError(ServiceError):
    status_code = 400

class SeatsUnavailableError(ServiceError):
    status_code = 409

class UpstreamError(ServiceError):
    """Échec d'un appel au store ou à Stripe."""
    status_code = 500

class SettlementFailed(ServiceError):
    """Règlement annulé: les étapes déjà appliquées ont été compensées."""
    status_code = 500
