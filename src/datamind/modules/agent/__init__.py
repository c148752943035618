"""DataMind Agent Module - conversation state and chat."""

from datamind.modules.agent.conversation import ConversationState, append_message
from datamind.modules.agent.schemas import ChatMessage, ChatTurnResult

__all__ = ["ChatMessage", "ChatTurnResult", "ConversationState", "append_message"]
