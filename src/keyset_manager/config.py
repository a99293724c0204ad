"""Configurações para o KeysetManager."""

import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Self

from .cipher import CIPHER_BACKENDS, AuthenticatedCipher, SecureRandomSource
from .utils import parse_env_file

DEFAULT_ROTATION_GRACE = 24 * 60 * 60  # 1 dia


@dataclass
class KeysetConfig:
    """Configuração de um Keyset.

    Attributes:
        rotation_grace: Segundos que a chave anterior continua válida para
            descriptografia após uma rotação (padrão: 86400)
        cipher_backend: Cifra AEAD, "aesgcm" ou "chacha20" (padrão: "aesgcm")
        type_id: Tag opaca para distinguir keysets persistidos sob o mesmo nome
        logger: Logger opcional para mensagens (usa logging padrão se None)
    """

    rotation_grace: float = DEFAULT_ROTATION_GRACE
    cipher_backend: str = "aesgcm"
    type_id: int = 0
    logger: Optional[Any] = None  # logging.Logger

    def __post_init__(self) -> None:
        """Valida configuração após inicialização."""
        self.cipher_backend = self.cipher_backend.strip("\"'").lower()
        if self.cipher_backend not in CIPHER_BACKENDS:
            raise ValueError(
                f"Cifra não suportada: '{self.cipher_backend}'. "
                f"Disponíveis: {sorted(CIPHER_BACKENDS)}"
            )
        if not math.isfinite(self.rotation_grace):
            raise ValueError(
                f"rotation_grace deve ser finito: {self.rotation_grace}"
            )
        if self.rotation_grace < 0:
            raise ValueError(
                f"rotation_grace não pode ser negativo: {self.rotation_grace}"
            )

    def create_cipher(
        self, random_source: Optional[SecureRandomSource] = None
    ) -> AuthenticatedCipher:
        """Instancia a cifra configurada."""
        return CIPHER_BACKENDS[self.cipher_backend](random_source)

    @classmethod
    def from_environment(cls, prefix: str = "KEYSET", **kwargs: Any) -> Self:
        """Cria configuração a partir de variáveis de ambiente.

        Formato esperado:
            KEYSET_ROTATION_GRACE=86400
            KEYSET_CIPHER_BACKEND=aesgcm
            KEYSET_TYPE_ID=0

        Variáveis ausentes mantêm o valor padrão.

        Raises:
            ValueError: Se algum valor for inválido
        """
        return cls._from_mapping(os.environ, prefix=prefix, **kwargs)

    @classmethod
    def from_file(cls, filename: str, prefix: str = "KEYSET", **kwargs: Any) -> Self:
        """Cria configuração a partir de um arquivo .env.

        Raises:
            FileNotFoundError: Se o arquivo não existir
            ValueError: Se algum valor for inválido
        """
        env_path = Path(filename)
        if not env_path.exists():
            raise FileNotFoundError(f"Arquivo .env não encontrado: {filename}")

        return cls._from_mapping(parse_env_file(env_path), prefix=prefix, **kwargs)

    @classmethod
    def _from_mapping(
        cls, mapping: Mapping[str, str], prefix: str = "KEYSET", **kwargs: Any
    ) -> Self:
        """Cria configuração a partir de um mapeamento de variáveis."""
        values: dict[str, Any] = {}

        grace = mapping.get(f"{prefix}_ROTATION_GRACE")
        if grace:
            try:
                values["rotation_grace"] = float(grace.strip("\"'"))
            except ValueError as exc:
                raise ValueError(
                    f"{prefix}_ROTATION_GRACE deve ser um número de segundos: {grace!r}"
                ) from exc

        backend = mapping.get(f"{prefix}_CIPHER_BACKEND")
        if backend:
            values["cipher_backend"] = backend

        type_id = mapping.get(f"{prefix}_TYPE_ID")
        if type_id:
            try:
                values["type_id"] = int(type_id.strip("\"'"))
            except ValueError as exc:
                raise ValueError(f"{prefix}_TYPE_ID deve ser inteiro: {type_id!r}") from exc

        values.update(kwargs)
        return cls(**values)
