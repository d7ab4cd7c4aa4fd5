from __future__ import annotations

from assistant_relay.errors import UpstreamError


class ScriptedClient:
    """Stands in for AssistantClient: replays a scripted run status sequence."""

    def __init__(self, statuses=("completed",), reply="Hello, world", messages=None,
                 thread_id="thread_new", fail_on=None):
        self.statuses = list(statuses)
        self.reply = reply
        self.messages = messages
        self.thread_id = thread_id
        self.fail_on = fail_on
        self.calls: list[tuple] = []

    def _record(self, name, *args):
        self.calls.append((name, *args))
        if self.fail_on == name:
            raise UpstreamError(name, "boom", status_code=400)

    def names(self) -> list[str]:
        return [c[0] for c in self.calls]

    def create_thread(self):
        self._record("create_thread")
        return {"id": self.thread_id}

    def create_message(self, thread_id, role, content):
        self._record("create_message", thread_id, role, content)
        return {"id": "msg_user"}

    def create_run(self, thread_id, assistant_id):
        self._record("create_run", thread_id, assistant_id)
        return {"id": "run_1", "status": self.statuses.pop(0)}

    def retrieve_run(self, thread_id, run_id):
        self._record("retrieve_run", thread_id, run_id)
        status = self.statuses.pop(0) if self.statuses else "in_progress"
        return {"id": run_id, "status": status}

    def cancel_run(self, thread_id, run_id):
        self._record("cancel_run", thread_id, run_id)
        return {"id": run_id, "status": "cancelling"}

    def list_messages(self, thread_id, order="desc", limit=1):
        self._record("list_messages", thread_id, order, limit)
        if self.messages is not None:
            return self.messages
        return [{
            "id": "msg_reply",
            "role": "assistant",
            "content": [{"type": "text", "text": {"value": self.reply, "annotations": []}}],
        }]

