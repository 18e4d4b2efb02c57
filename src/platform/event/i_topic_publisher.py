"""
Topic Publisher Interface

The one collaborator the seat change broadcaster needs: put an event on a named topic.
"""

from typing import Any, Protocol


class ITopicPublisher(Protocol):
    async def publish(self, topic: str, event: dict[str, Any]) -> None:
        """
        Publish event to every subscriber of topic

        Args:
            topic: Topic name, e.g. 'grid' or 'seat:3-5'
            event: JSON-serializable event envelope

        Note:
            - Best effort: no delivery or ordering guarantee
            - May raise on transport failure; callers decide whether to swallow
        """
        ...
