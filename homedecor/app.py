# module homedecor.app
from homedecor.app_setup.factory import create_app

# App globale
app = create_app()
