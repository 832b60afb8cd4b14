# Generator package

# Makes generate/ importable and exposes key interfaces.

from .generator import ChatGenerator, trim_history
from .types import Message, ChatResponse, ModelParams
from .clients.echo_dev_client import EchoDevClient

__all__ = ["ChatGenerator", "trim_history", "Message", "ChatResponse", "ModelParams", "EchoDevClient"]
