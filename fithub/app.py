# module fithub.app
from fithub.app_setup.factory import create_app

# App globale
app = create_app()
