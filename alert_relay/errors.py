from typing import Any, Optional


class RelayError(Exception):
    """Erro terminal do request. `status_code` é o código HTTP devolvido ao chamador."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BadRequest(RelayError):
    status_code = 400


class UnsupportedPayload(RelayError):
    """Payload válido em JSON mas sem formato de alerta conhecido.

    Guarda o JSON decodificado em `payload` para log de diagnóstico.
    """

    def __init__(self, message: str, payload: Any = None):
        super().__init__(message)
        self.payload = payload


class UnrecognizedSchema(UnsupportedPayload):
    pass


class MissingConfiguration(RelayError):
    pass


class DispatchError(RelayError):
    pass


class DeliveryRejected(DispatchError):
    def __init__(self, status: int, body: str):
        super().__init__(f"resposta inesperada do gateway de mensagens ({status}): {body}")
        self.status = status
        self.body = body


class TransportError(DispatchError):
    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause
