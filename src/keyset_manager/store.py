"""Armazenamento de keysets por nome."""

import logging
from threading import Lock
from typing import Dict, List, Optional, Protocol

from .errors import KeysetNotFoundError
from .keyset import Keyset


class CryptoKeyStore(Protocol):
    """Interface genérica para guardar e recuperar keysets.

    Implementações persistentes devem manter os keysets criptografados em
    repouso, tipicamente com uma chave primária derivada de um segredo externo.
    """

    def get(self, name: str) -> Keyset:
        ...

    def put(self, name: str, keyset: Keyset) -> None:
        ...


class MemoryKeyStore:
    """CryptoKeyStore em memória, thread-safe."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._keysets: Dict[str, Keyset] = {}
        self._lock = Lock()
        self._logger = logger or logging.getLogger(__name__)

    def get(self, name: str) -> Keyset:
        """Retorna o keyset registrado sob ``name``.

        Raises:
            KeysetNotFoundError: Se não houver keyset com esse nome
        """
        with self._lock:
            try:
                return self._keysets[name]
            except KeyError:
                raise KeysetNotFoundError(f"Keyset '{name}' não encontrado") from None

    def put(self, name: str, keyset: Keyset) -> None:
        """Registra (ou substitui) o keyset sob ``name``."""
        with self._lock:
            self._keysets[name] = keyset
        self._logger.debug(f"Keyset '{name}' armazenado (type_id={keyset.type_id})")

    def names(self) -> List[str]:
        with self._lock:
            return sorted(self._keysets)
