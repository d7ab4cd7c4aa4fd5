# Fichero: assistant_relay/relay.py - thread, message, run, espera y respuesta
import time
import logging
from typing import Callable, NamedTuple, Optional

from .client import AssistantClient
from .config import Settings
from .errors import RunFailureError, RunTimeoutError, UnexpectedShapeError, UpstreamError

FAILED_STATUSES = ("failed", "cancelled", "expired")


class RelayResult(NamedTuple):
    thread_id: str
    assistant_message: str


def ensure_thread(client: AssistantClient, thread_id: Optional[str]) -> str:
    if thread_id:
        return thread_id
    thread = client.create_thread()
    new_id = thread.get("id") if isinstance(thread, dict) else None
    if not new_id:
        raise UnexpectedShapeError("create_thread returned no id")
    logging.info("Thread %s creado", new_id)
    return new_id


def wait_for_run(client: AssistantClient, thread_id: str, run: dict,
                 interval: float = 1.0, max_attempts: int = 30,
                 sleep: Callable[[float], None] = time.sleep) -> dict:
    """
    Espera a que el run llegue a 'completed'.

    Se mira primero el estado devuelto al crear el run y luego se consulta
    como mucho ``max_attempts`` veces, con ``interval`` segundos entre
    consultas. 'failed', 'cancelled' o 'expired' cortan la espera en el acto.
    Si se agota el límite se intenta cancelar el run antes de abandonar.
    """
    attempts = 0
    while True:
        status = run.get("status")
        if status == "completed":
            return run
        if status in FAILED_STATUSES:
            raise RunFailureError(status)
        if attempts >= max_attempts:
            break
        sleep(interval)
        run_id = run["id"]
        run = client.retrieve_run(thread_id, run_id)
        if not isinstance(run, dict) or not run.get("id"):
            raise UnexpectedShapeError(f"retrieve_run returned no run for {run_id}")
        attempts += 1

    logging.warning("Run %s sigue en '%s' tras %d consultas; se cancela",
                    run.get("id"), status, attempts)
    try:
        client.cancel_run(thread_id, run["id"])
    except UpstreamError:
        # El run puede haber terminado entretanto; el timeout es lo que importa
        logging.warning("No se pudo cancelar el run %s", run.get("id"), exc_info=True)
    raise RunTimeoutError(attempts, status)


def _text_of(message: dict) -> Optional[str]:
    for part in message.get("content") or []:
        if isinstance(part, dict) and part.get("type") == "text":
            text = part.get("text")
            if isinstance(text, dict) and isinstance(text.get("value"), str):
                return text["value"]
    return None


def latest_reply(client: AssistantClient, thread_id: str) -> str:
    messages = client.list_messages(thread_id, order="desc", limit=1)
    if not messages:
        raise UnexpectedShapeError(f"thread {thread_id} has no messages")
    newest = messages[0]
    if not isinstance(newest, dict) or newest.get("role") != "assistant":
        raise UnexpectedShapeError(f"newest message in {thread_id} is not from the assistant")
    text = _text_of(newest)
    if text is None:
        raise UnexpectedShapeError(f"newest message in {thread_id} has no text content")
    return text


def relay_message(client: AssistantClient, settings: Settings, message,
                  thread_id: Optional[str] = None,
                  sleep: Optional[Callable[[float], None]] = None) -> RelayResult:
    thread_id = ensure_thread(client, thread_id)

    client.create_message(thread_id, "user", message)

    run = client.create_run(thread_id, settings.assistant_id)
    if not isinstance(run, dict) or not run.get("id"):
        raise UnexpectedShapeError("create_run returned no id")
    logging.info("Run %s lanzado en thread %s", run["id"], thread_id)

    wait_for_run(client, thread_id, run,
                 interval=settings.poll_interval,
                 max_attempts=settings.max_poll_attempts,
                 sleep=sleep or time.sleep)

    reply = latest_reply(client, thread_id)
    logging.info("Run %s completado (%d caracteres)", run["id"], len(reply))
    return RelayResult(thread_id, reply)
