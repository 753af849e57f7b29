"""Language model access for insights, anomaly suggestions and chat."""

from .narrative import ChatTurn, NarrativeModel, build_message_history

__all__ = ["ChatTurn", "NarrativeModel", "build_message_history"]
