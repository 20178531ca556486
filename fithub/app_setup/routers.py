"""
Registre central des routers de l'API.
Les chemins sont à la racine (pas de préfixe de version) sauf /api/set-token et /health.
"""
from fastapi import FastAPI
from fithub.auth.views import router as auth_router
from fithub.users.views import router as users_router
from fithub.classes.views import router as classes_router
from fithub.cart.views import router as cart_router
from fithub.payments.views import router as payments_router
from fithub.enrollments.views import router as enrollments_router
from fithub.instructors.views import router as instructors_router
from fithub.admin.views import router as admin_router
from fithub.health.router import router as health_router

def register_routers(app: FastAPI) -> None:
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(classes_router)
    app.include_router(cart_router)
    app.include_router(payments_router)
    app.include_router(enrollments_router)
    app.include_router(instructors_router)
    # Admin
    app.include_router(admin_router)
    # Health & monitoring
    app.include_router(health_router)
