"""Actor interface."""

from cybersystems.agent.protocol import AgentProtocol

__all__ = ["AgentProtocol"]
