import json
import logging
import os
import sys
from typing import Any, Callable

from pydantic import BaseModel

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(debug_mode: bool = False) -> None:
    level = logging.DEBUG if debug_mode else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stdout)
    logging.getLogger().setLevel(level)


def pause_marker_present(path: str) -> bool:
    if not path:
        return False
    return os.path.exists(path)


def pause_file_check(path: str) -> Callable[[], bool]:
    """Retorna o teste de pausa usado pelo dispatcher, apoiado em um arquivo marcador."""
    def is_paused() -> bool:
        return pause_marker_present(path)
    return is_paused


def dump_payload(data: Any) -> str:
    """Serializa um payload para log de diagnóstico, entre linhas separadoras."""
    if isinstance(data, BaseModel):
        data = data.model_dump(by_alias=True)
    try:
        text = json.dumps(data, indent=2, ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        text = repr(data)
    return f"\n--------------\n{text}\n--------------"
