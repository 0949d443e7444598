import os

# Configurações globais de ambiente
APP_HOST = os.getenv("APP_HOST", "0.0.0.0")
APP_PORT = int(os.getenv("APP_PORT", "8080"))
DEBUG_MODE = os.getenv("DEBUG_MODE", "False").lower() == "true"

# Destinatário padrão: lido a cada request, não no import
RECIPIENT_ENV_VAR = "IMESSAGE_RECIPIENT"

# Gateway de mensagens (iMessage server)
GATEWAY_URL = os.getenv("GATEWAY_URL", "http://192.168.1.12:3005/message")
GATEWAY_TIMEOUT_SECONDS = int(os.getenv("GATEWAY_TIMEOUT_SECONDS", "30"))

# Arquivo marcador: se existir, nenhuma mensagem é enviada
PAUSE_FILE = os.getenv("PAUSE_FILE", "/tmp/pause")

# Rota POST / com detecção automática do schema (deploy alternativo)
CONTENT_SNIFF_ROUTE = os.getenv("CONTENT_SNIFF_ROUTE", "false").lower() == "true"

# Famílias de schema aceitas nas rotas dedicadas
SCHEMA_GRAFANA = "grafana"
SCHEMA_ALERTMANAGER = "alertmanager"


def get_recipient() -> str:
    return os.getenv(RECIPIENT_ENV_VAR, "").strip()
