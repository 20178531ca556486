"""
ASGI entrypoint: expose `app` pour les process managers (uvicorn, gunicorn + UvicornWorker).
Toute la configuration est centralisée dans fithub.app_setup.factory.
"""

from fithub.app import app
