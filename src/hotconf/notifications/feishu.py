from __future__ import annotations

import json
import logging
from typing import Callable, Optional

import httpx

logger = logging.getLogger(__name__)

PayloadBuilder = Callable[[str, Optional[Exception]], bytes]


def default_payload(name: str, err: Optional[Exception]) -> bytes:
    text = f"Config {name} reload failed: {err}"
    return json.dumps(
        {"msg_type": "text", "content": {"text": text}},
        ensure_ascii=False,
        separators=(",", ":"),
    ).encode("utf-8")


class FeishuBotHook:
    """Posts reload failures to a Feishu (Lark) custom bot webhook.

    Delivery problems are logged and never raised, so a broken webhook
    cannot take down the watcher thread.
    """

    def __init__(
        self,
        webhook_addr: str,
        client: Optional[httpx.Client] = None,
        timeout: float = 10.0,
    ):
        self.webhook_addr = webhook_addr
        self._payload_builder: Optional[PayloadBuilder] = None
        self._client = client or httpx.Client(timeout=timeout)

    def set_payload_builder(self, payload_builder: PayloadBuilder) -> None:
        self._payload_builder = payload_builder

    def build_payload(self, name: str, err: Optional[Exception]) -> bytes:
        if self._payload_builder is not None:
            return self._payload_builder(name, err)
        return default_payload(name, err)

    def notify(self, name: str, err: Optional[Exception]) -> None:
        try:
            resp = self._client.post(
                self.webhook_addr,
                content=self.build_payload(name, err),
                headers={"Content-Type": "application/json"},
            )
        except httpx.HTTPError as e:
            logger.warning("feishu bot notify failed: %s", e)
            return
        if resp.status_code != 200:
            logger.warning("feishu bot notify failed: %s", resp.status_code)
            return
        try:
            result = resp.json()
        except ValueError as e:
            logger.warning("feishu bot notify failed: %s", e)
            return
        code = result.get("code", 0) if isinstance(result, dict) else 0
        if code != 0:
            logger.warning("feishu bot notify failed: %s %s", code, result.get("msg"))

    def close(self) -> None:
        self._client.close()
