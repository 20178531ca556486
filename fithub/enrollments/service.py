# module fithub.enrollments.service

from typing import Dict, List
from fithub.classes import repository as classes_repository
from fithub.enrollments import repository as enrollments_repository
from fithub.users import repository as users_repository

POPULAR_LIMIT = 6

def enrolled_classes(user_email: str) -> List[dict]:
    """
    Classes achetées par user_email, chacune avec son instructeur:
    [{"classes": <classe>, "instructor": <utilisateur ou None>}, ...]
    Jointures faites côté Python (lectures séparées enrolled -> classes -> users).
    """
    enrollments = enrollments_repository.list_enrollments(user_email)
    class_ids: List[str] = []
    for row in enrollments:
        for cid in row.get("classes_id") or []:
            if str(cid) not in class_ids:
                class_ids.append(str(cid))
    if not class_ids:
        return []
    by_id = {str(c.get("id")): c for c in classes_repository.fetch_classes_by_ids(class_ids)}
    instructors = {
        u.get("email"): u
        for u in users_repository.get_users_by_emails(c.get("instructor_email") for c in by_id.values())
    }
    return [
        {"classes": by_id[cid], "instructor": instructors.get(by_id[cid].get("instructor_email"))}
        for cid in class_ids
        if cid in by_id
    ]

def popular_classes() -> List[dict]:
    return classes_repository.popular_classes(limit=POPULAR_LIMIT)

def popular_instructors() -> List[dict]:
    """Somme des inscrits par instructeur (classes approuvées), top 6, instructeurs actifs seulement."""
    totals: Dict[str, int] = {}
    for row in enrollments_repository.list_class_stats():
        email = row.get("instructor_email")
        if not email:
            continue
        totals[email] = totals.get(email, 0) + int(row.get("total_enrolled") or 0)
    instructors = {
        u.get("email"): u
        for u in users_repository.get_users_by_emails(totals.keys())
        if u.get("role") == "instructor"
    }
    ranked = sorted(
        ({"instructor": instructors[email], "totalEnrolled": total} for email, total in totals.items() if email in instructors),
        key=lambda r: r["totalEnrolled"],
        reverse=True,
    )
    return ranked[:POPULAR_LIMIT]

def list_instructors() -> List[dict]:
    return users_repository.list_users_by_role("instructor")
