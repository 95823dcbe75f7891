from .feishu import FeishuBotHook, default_payload

__all__ = ["FeishuBotHook", "default_payload"]
