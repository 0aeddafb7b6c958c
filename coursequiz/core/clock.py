"""Clock - Fonte de tempo injetavel para timestamps do servidor."""

from collections.abc import Callable
from datetime import datetime, timedelta, timezone

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Retorna o instante atual em UTC."""
    return datetime.now(timezone.utc)


class FixedClock:
    """Relogio deterministico para testes.

    Example:
        >>> clock = FixedClock(datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc))
        >>> clock()
        datetime.datetime(2024, 1, 15, 12, 0, tzinfo=datetime.timezone.utc)
        >>> clock.advance(seconds=30)
    """

    def __init__(self, start: datetime):
        self._now = start

    def __call__(self) -> datetime:
        return self._now

    def advance(self, **kwargs: float) -> None:
        """Avanca o relogio (aceita os mesmos argumentos de timedelta)."""
        self._now = self._now + timedelta(**kwargs)
