"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.db_setting import Database
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.platform.event.in_memory_topic_hub import InMemoryTopicHub
from src.platform.event.redis_topic_publisher import RedisTopicPublisher
from src.platform.event.redis_topic_relay import RedisTopicRelay
from src.platform.state.keyed_lock import KeyedLock
from src.platform.state.redis_client import RedisClient
from src.platform.state.redis_keyed_lock import RedisKeyedLock
from src.service.seating.driven_adapter.broadcaster.seat_change_broadcaster_impl import (
    SeatChangeBroadcasterImpl,
)


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database
    database = providers.Singleton(Database, url=config_service.provided.DATABASE_URL_ASYNC)

    # One unit of work per business operation; use cases receive the provider itself
    uow_factory = providers.Factory(SqlAlchemyUnitOfWork, session_factory=database.provided.session)

    redis_client = providers.Singleton(RedisClient, url=config_service.provided.REDIS_URL)

    # Booking guard shared by every command use case
    memory_seat_lock = providers.Singleton(
        KeyedLock, timeout=config_service.provided.BOOKING_LOCK_TIMEOUT_SECONDS
    )
    redis_seat_lock = providers.Singleton(
        RedisKeyedLock,
        redis_client=redis_client,
        timeout=config_service.provided.BOOKING_LOCK_TIMEOUT_SECONDS,
        ttl_ms=config_service.provided.SEAT_LOCK_TTL_MS,
    )
    seat_lock = providers.Selector(
        config_service.provided.SEAT_LOCK_BACKEND,
        memory=memory_seat_lock,
        redis=redis_seat_lock,
    )

    # Real-time transport
    topic_hub = providers.Singleton(
        InMemoryTopicHub, max_buffer_size=config_service.provided.SUBSCRIBER_BUFFER_SIZE
    )
    redis_topic_publisher = providers.Singleton(RedisTopicPublisher, redis_client=redis_client)
    redis_topic_relay = providers.Singleton(
        RedisTopicRelay, redis_client=redis_client, hub=topic_hub
    )
    topic_publisher = providers.Selector(
        config_service.provided.BROADCAST_BACKEND,
        memory=topic_hub,
        redis=redis_topic_publisher,
    )

    seat_change_broadcaster = providers.Singleton(
        SeatChangeBroadcasterImpl, publisher=topic_publisher
    )


container = Container()


def cleanup() -> None:
    container.reset_singletons()
