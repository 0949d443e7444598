import logging
from typing import Callable, Optional

from flask import Flask, request

from .constants import (
    CONTENT_SNIFF_ROUTE,
    GATEWAY_TIMEOUT_SECONDS,
    GATEWAY_URL,
    PAUSE_FILE,
    RECIPIENT_ENV_VAR,
    SCHEMA_ALERTMANAGER,
    SCHEMA_GRAFANA,
    get_recipient,
)
from .errors import MissingConfiguration, RelayError, UnsupportedPayload
from .formatters import normalize
from .services import MessageDispatcher
from .utils import dump_payload, pause_file_check

logger = logging.getLogger(__name__)


def create_app(gateway_url: Optional[str] = None, timeout: Optional[float] = None,
               pause_file: Optional[str] = None, content_sniff_route: Optional[bool] = None,
               recipient_provider: Optional[Callable[[], str]] = None,
               dispatcher: Optional[MessageDispatcher] = None):
    app = Flask(__name__)

    # Configuração resolvida uma vez, na criação do app
    if dispatcher is None:
        dispatcher = MessageDispatcher(
            gateway_url=gateway_url or GATEWAY_URL,
            timeout=timeout if timeout is not None else GATEWAY_TIMEOUT_SECONDS,
            is_paused=pause_file_check(pause_file if pause_file is not None else PAUSE_FILE),
        )
    if recipient_provider is None:
        recipient_provider = get_recipient
    if content_sniff_route is None:
        content_sniff_route = CONTENT_SNIFF_ROUTE

    @app.errorhandler(RelayError)
    def handle_relay_error(exc):
        if isinstance(exc, UnsupportedPayload):
            logger.error(f"{exc.message}{dump_payload(exc.payload)}")
        elif exc.status_code == 400:
            logger.warning(f"got bad req: {exc.message}")
        else:
            logger.error(f"Erro ao processar alerta: {exc.message}")
        return exc.message, exc.status_code, {"Content-Type": "text/plain; charset=utf-8"}

    def process_request(schema):
        # Destinatário é validado antes de qualquer normalização
        recipient = recipient_provider()
        if not recipient:
            raise MissingConfiguration(f"variável de ambiente {RECIPIENT_ENV_VAR} não definida no servidor!")

        message = normalize(request.get_data(), recipient, schema=schema)
        logger.debug(f"Mensagem normalizada: {message.to_json()}")

        if dispatcher.dispatch(message):
            logger.info(f"Alerta ({schema or 'auto'}) encaminhado ao gateway")
        else:
            logger.info(f"Alerta ({schema or 'auto'}) não encaminhado: envio pausado")
        return '', 200

    @app.route('/health', methods=['GET'])
    def health():
        return {'status': 'ok', 'service': 'alert-relay'}, 200

    @app.route('/grafana', methods=['POST'])
    def grafana():
        return process_request(SCHEMA_GRAFANA)

    @app.route('/alertmanager', methods=['POST'])
    def alertmanager():
        return process_request(SCHEMA_ALERTMANAGER)

    if content_sniff_route:
        @app.route('/', methods=['POST'])
        def sniff():
            return process_request(None)

    return app
