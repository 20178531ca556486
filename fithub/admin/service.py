from typing import Dict
import logging

from fithub.config import ROLES
from fithub.app_setup.errors import NotFoundError, ValidationError
from fithub.admin import repository as admin_repository
from fithub.instructors import repository as applications_repo
from fithub.users import repository as users_repository

logger = logging.getLogger(__name__)

# module fithub.admin.service
def promote(application_id: str, new_role: str) -> Dict[str, str]:
    """
    Applique la décision admin sur une candidature:
    1) rôle requis et connu (student|instructor|admin), sinon 400
    2) candidature puis utilisateur (par l'email de la candidature), sinon 404
    3) changement de rôle; aucune ligne modifiée -> 404
    4) la candidature prend pour statut le rôle demandé
    Le rôle n'est jamais repris du jeton: la Role Gate relit la base à chaque requête.
    """
    role = (new_role or "").strip().lower()
    if not role:
        raise ValidationError("Role is required")
    if role not in ROLES:
        raise ValidationError("Rôle inconnu")

    application = applications_repo.get_application(application_id)
    if not application:
        raise NotFoundError("Applied user not found")

    email = application.get("email")
    if not email or not users_repository.get_user_by_email(email):
        raise NotFoundError("User not found")

    if users_repository.set_user_role(email, role) == 0:
        raise NotFoundError("User role unchanged or not found")

    applications_repo.set_application_status(application_id, role)
    logger.info("admin.promote application=%s email=%s role=%s", application_id, email, role)
    return {"message": "User role updated successfully"}

def reject_application(application_id: str) -> Dict[str, int]:
    if not applications_repo.delete_application(application_id):
        raise NotFoundError("Candidature introuvable")
    logger.info("admin.reject_application id=%s", application_id)
    return {"deletedCount": 1}

def admin_stats() -> Dict[str, int]:
    return {
        "approvedClasses": admin_repository.count_table_rows("classes", status="approved"),
        "pendingClasses": admin_repository.count_table_rows("classes", status="pending"),
        "instructors": admin_repository.count_table_rows("users", role="instructor"),
        "totalClasses": admin_repository.count_table_rows("classes"),
        "totalEnrolled": admin_repository.count_table_rows("enrolled"),
    }
