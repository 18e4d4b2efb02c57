#!/usr/bin/env python
"""
Seating API Launcher

Serves src.main:app under granian, the same as
`granian src.main:app --interface asgi --host $API_HOST --port $API_PORT --workers $WORKERS`.
With WORKERS > 1 set SEAT_LOCK_BACKEND=redis and BROADCAST_BACKEND=redis so every
worker shares the booking guard and the seat channel.
"""

from granian import Granian
from granian.constants import Interfaces

from src.platform.config.core_setting import Settings, settings
from src.platform.logging.loguru_io import Logger


APP_TARGET = 'src.main:app'


def build_server(config: Settings = settings) -> Granian:
    if config.WORKERS > 1 and 'memory' in (config.SEAT_LOCK_BACKEND, config.BROADCAST_BACKEND):
        Logger.base.warning(
            f'⚠️ [LAUNCH] {config.WORKERS} workers with an in-memory backend '
            f'(seat lock: {config.SEAT_LOCK_BACKEND}, broadcast: {config.BROADCAST_BACKEND})'
        )
    return Granian(
        APP_TARGET,
        address=config.API_HOST,
        port=config.API_PORT,
        interface=Interfaces.ASGI,
        workers=config.WORKERS,
    )


def main() -> None:
    server = build_server()
    Logger.base.info(
        f'🚀 [LAUNCH] granian {APP_TARGET} on {settings.API_HOST}:{settings.API_PORT} '
        f'({settings.WORKERS} workers)'
    )
    server.serve()


if __name__ == '__main__':
    main()
