"""
Factory d'application utilisée par les entrypoints (fithub.app, fithub.asgi).
"""
from fastapi import FastAPI
from .lifespan import lifespan
from .middlewares import register_basic_middlewares, register_security_middleware
from .exceptions import register_exception_handlers
from .routes import register_routes
from .routers import register_routers

def create_app() -> FastAPI:
    """
    Construit l'app FastAPI avec le lifespan et enregistre:
      - middlewares de base (CORS, hosts, proxy) puis en-têtes de sécurité
      - gestionnaires d'exceptions (enveloppe {"error", "message"})
      - route racine et tous les routers
    """
    app = FastAPI(title="FitHub API", lifespan=lifespan)
    register_basic_middlewares(app)
    register_security_middleware(app)
    register_exception_handlers(app)
    register_routes(app)
    register_routers(app)
    return app
