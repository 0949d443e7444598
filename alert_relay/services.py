import logging
from typing import Callable, Optional

import requests

from .constants import GATEWAY_TIMEOUT_SECONDS, GATEWAY_URL, PAUSE_FILE
from .errors import DeliveryRejected, TransportError
from .models import NormalizedMessage
from .utils import pause_file_check

logger = logging.getLogger(__name__)


class MessageDispatcher:
    """
    Envia a NormalizedMessage ao gateway de mensagens.

    Regras:
    - Se `is_paused()` for verdadeiro, não faz chamada de rede e considera sucesso
    - Um único POST por mensagem, sem retry nem fila
    - Apenas HTTP 200 é sucesso; outro status -> DeliveryRejected
    - Falha de rede (conexão, timeout, DNS) -> TransportError
    """

    def __init__(self, gateway_url: str = GATEWAY_URL, timeout: float = GATEWAY_TIMEOUT_SECONDS,
                 is_paused: Optional[Callable[[], bool]] = None):
        self.gateway_url = gateway_url
        self.timeout = timeout
        self.is_paused = is_paused if is_paused is not None else pause_file_check(PAUSE_FILE)

    def dispatch(self, message: NormalizedMessage) -> bool:
        """Retorna True se a mensagem foi entregue, False se o envio está pausado."""
        if self.is_paused():
            logger.warning(f"Pause file detected. Won't send message to '{message.recipient.handle}'")
            return False

        wire = message.to_json()
        logger.debug(f"Enviando payload para {self.gateway_url}: {wire}")
        try:
            resp = requests.post(
                self.gateway_url,
                data=wire.encode("utf-8"),
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as exc:
            logger.error(f"Falha de rede ao contatar o gateway {self.gateway_url}: {exc}")
            raise TransportError(f"falha ao contatar o gateway de mensagens: {exc}", cause=exc) from exc

        if resp.status_code != 200:
            logger.error(f"Gateway respondeu {resp.status_code}: {resp.text}")
            raise DeliveryRejected(resp.status_code, resp.text)

        logger.info(f"Mensagem entregue para '{message.recipient.handle}'")
        return True
