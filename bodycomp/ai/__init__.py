from bodycomp.ai.client_base import BaseChatClient
from bodycomp.ai.factory import ChatClientFactory

__all__ = ["BaseChatClient", "ChatClientFactory"]
