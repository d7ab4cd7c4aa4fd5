# Fichero: chat/__init__.py - relay de chat hacia el Assistant

import json
import logging

import azure.functions as func

from assistant_relay import AssistantClient, RelayError, load_settings, relay_message
from assistant_relay.errors import InvalidRequestError

# --- 1. Cliente ---
# Se inicializa una sola vez por proceso para reutilizar la conexión.
# La clave sale de la Configuración de la Aplicación (Key Vault).
CLIENT = AssistantClient.from_env()

UNEXPECTED = "An unexpected server error occurred."


def json_response(body: dict, status_code: int) -> func.HttpResponse:
    return func.HttpResponse(json.dumps(body), status_code=status_code,
                             mimetype="application/json")


def read_body(req: func.HttpRequest) -> dict:
    try:
        body = req.get_json()
    except ValueError:
        raise InvalidRequestError("request body is not valid JSON") from None
    if not isinstance(body, dict):
        raise InvalidRequestError("request body is not a JSON object")
    return body


# --- 2. Función Principal ---

def main(req: func.HttpRequest) -> func.HttpResponse:
    if req.method.upper() != "POST":
        return json_response({"error": "Method Not Allowed"}, 405)

    try:
        body = read_body(req)
        message = body.get("message")
        thread_id = body.get("threadId")

        # Falla aquí, antes de cualquier llamada remota, si falta ASSISTANT_ID
        settings = load_settings()

        result = relay_message(CLIENT, settings, message, thread_id)

        return json_response({
            "threadId": result.thread_id,
            "assistantMessage": result.assistant_message,
        }, 200)

    except RelayError as e:
        # Detalle completo solo en el log; al cliente, el mensaje corto
        logging.exception("chat: %s", e)
        return json_response({"error": e.public_message}, 500)

    except Exception:
        logging.exception("chat ha fallado de forma inesperada.")
        return json_response({"error": UNEXPECTED}, 500)
