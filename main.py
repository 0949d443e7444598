from alert_relay.controller import create_app
from alert_relay.constants import APP_HOST, APP_PORT, DEBUG_MODE
from alert_relay.utils import configure_logging


configure_logging(DEBUG_MODE)
app = create_app()

if __name__ == '__main__':
    app.run(host=APP_HOST, port=APP_PORT, debug=DEBUG_MODE)
