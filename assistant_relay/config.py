# Fichero: assistant_relay/config.py - configuración desde el entorno
# Las variables vienen de la Configuración de la Aplicación (o de Key Vault).
# load_settings() se llama en cada petición: si falta algo falla esa petición,
# no el proceso. La conexión (clave, endpoint, versión, timeout) la lee solo
# AssistantClient.from_env() al arrancar.
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .errors import ConfigurationError

OPENAI_BASE = "https://api.openai.com/v1"


@dataclass(frozen=True)
class Settings:
    assistant_id: str
    poll_interval: float = 1.0
    max_poll_attempts: int = 30


def api_key_from_env(env: Mapping[str, str]) -> str:
    return (env.get("OPENAI_API_KEY") or env.get("AZURE_OPENAI_API_KEY") or "").strip()


def read_number(env: Mapping[str, str], name: str, default, cast):
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = cast(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number.") from None
    if value <= 0:
        raise ConfigurationError(f"{name} must be greater than zero.")
    return value


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if env is None else env

    assistant_id = (env.get("ASSISTANT_ID") or "").strip()
    if not assistant_id:
        raise ConfigurationError("ASSISTANT_ID not configured in the application settings.")

    # La clave se usa en el cliente; aquí solo se comprueba que exista
    if not api_key_from_env(env):
        raise ConfigurationError("OPENAI_API_KEY not configured in the application settings.")

    return Settings(
        assistant_id=assistant_id,
        poll_interval=read_number(env, "RELAY_POLL_INTERVAL", 1.0, float),
        max_poll_attempts=read_number(env, "RELAY_POLL_MAX_ATTEMPTS", 30, int),
    )
