"""Funções e primitivas auxiliares para o KeysetManager."""

import math
from contextlib import contextmanager
from datetime import timedelta
from pathlib import Path
from threading import Condition, Lock
from typing import Dict, Iterator, TextIO, Union

from dotenv import dotenv_values

Duration = Union[int, float, timedelta]


class AtomicCounter:
    """Thread-safe counter for statistics tracking.

    Uses a lock to ensure atomic increment and read operations,
    preventing race conditions under concurrent access.
    """

    def __init__(self) -> None:
        self._value = 0
        self._lock = Lock()

    def increment(self, amount: int = 1) -> None:
        """Atomically increment the counter."""
        with self._lock:
            self._value += amount

    def value(self) -> int:
        """Atomically read the current counter value."""
        with self._lock:
            return self._value


class ReadWriteLock:
    """Reader/writer lock.

    Múltiplos leitores simultâneos, um escritor exclusivo. Um escritor em
    espera bloqueia novos leitores, evitando que rotações fiquem paradas
    atrás de um fluxo contínuo de encrypt/decrypt. Não é reentrante.
    """

    def __init__(self) -> None:
        self._cond = Condition(Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    def acquire_read(self) -> None:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._writers_waiting += 1
            acquired = False
            try:
                while self._writer or self._readers:
                    self._cond.wait()
                acquired = True
            finally:
                self._writers_waiting -= 1
                if not acquired:
                    # Leitores bloqueados só por este escritor podem seguir
                    self._cond.notify_all()
            self._writer = True

    def release_write(self) -> None:
        with self._cond:
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        """Mantém o lock de leitura durante o bloco ``with``."""
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        """Mantém o lock de escrita durante o bloco ``with``."""
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()


def to_seconds(duration: Duration) -> float:
    """Converte uma duração em segundos.

    Args:
        duration: Segundos (int/float) ou ``timedelta``

    Returns:
        float: Duração em segundos (pode ser zero ou negativa)

    Raises:
        TypeError: Se o tipo não for suportado
        ValueError: Se a duração não for finita (nan, inf)

    Examples:
        >>> to_seconds(timedelta(hours=1))
        3600.0
        >>> to_seconds(30)
        30.0
    """
    if isinstance(duration, timedelta):
        seconds = duration.total_seconds()
    elif isinstance(duration, bool) or not isinstance(duration, (int, float)):
        raise TypeError(f"Duração deve ser número ou timedelta, recebido: {type(duration)}")
    else:
        seconds = float(duration)
    if not math.isfinite(seconds):
        raise ValueError(f"Duração deve ser finita, recebido: {seconds}")
    return seconds


def parse_env_stream(stream: TextIO) -> Dict[str, str]:
    """Parseia um stream .env usando python-dotenv."""
    data = dotenv_values(stream=stream)
    return {key: value for key, value in data.items() if value is not None}


def parse_env_file(path: Path) -> Dict[str, str]:
    """Parseia um arquivo .env usando python-dotenv."""
    with path.open("r", encoding="utf-8", errors="strict") as f:
        return parse_env_stream(f)
