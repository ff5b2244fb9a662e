import eventlet
eventlet.monkey_patch()

from eventlet import wsgi

from kamus.app import create_app
from kamus.config import get_settings

app = create_app()

if __name__ == "__main__":
    # Production server
    settings = get_settings()
    wsgi.server(eventlet.listen((settings.host, settings.port)), app)
