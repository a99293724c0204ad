"""Keyset - Coleção de chaves simétricas com rotação e expiração."""

import logging
import math
import time
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Tuple

from .cipher import (
    DEFAULT_CIPHER,
    KEY_SIZE,
    AuthenticatedCipher,
    SecureRandomSource,
    generate_random_bytes,
)
from .config import KeysetConfig
from .errors import (
    EmptyKeysetError,
    NoValidDecryptionKeyError,
    NoValidKeyError,
    PrimitiveError,
)
from .utils import AtomicCounter, Duration, ReadWriteLock, to_seconds


def is_expired(key: "Key", now: float) -> bool:
    """Indica se a chave expirou no instante ``now``.

    ``expires_at == 0`` significa que a chave nunca expira.
    """
    return key.expires_at != 0 and key.expires_at < now


@dataclass(eq=False)
class Key:
    """Material de chave simétrica usado por um Keyset.

    NOTA DE SEGURANÇA: ``value`` é guardado como bytearray para permitir a
    limpeza via :meth:`Keyset.cleanup` e nunca aparece no ``repr``. Uma chave
    zerada é recusada em encrypt e ignorada em decrypt.

    Attributes:
        value: Material de chave (32 bytes para as cifras padrão)
        created_at: Timestamp Unix de criação (imutável)
        expires_at: Timestamp Unix de expiração, ou 0 para nunca expirar
    """

    value: bytearray = field(repr=False)
    created_at: float = field(default_factory=time.time)
    expires_at: float = 0

    def __post_init__(self) -> None:
        if not isinstance(self.value, bytearray):
            self.value = bytearray(self.value)
        self._wiped = False

    def __setattr__(self, name, value) -> None:
        if name == "created_at" and "created_at" in self.__dict__:
            raise AttributeError("created_at é imutável")
        super().__setattr__(name, value)

    @classmethod
    def new_random(cls, random_source: Optional[SecureRandomSource] = None) -> "Key":
        """Cria uma chave com 32 bytes aleatórios.

        Raises:
            RandomSourceError: Se a fonte aleatória falhar
        """
        return cls(generate_random_bytes(KEY_SIZE, random_source))

    @classmethod
    def from_material(cls, material: bytes) -> "Key":
        """Cria uma chave a partir de material fornecido (e.g. ``hash_for_string``).

        O tamanho não é validado aqui; material inválido falha na cifra.
        """
        return cls(material)

    def is_expired(self, now: Optional[float] = None) -> bool:
        return is_expired(self, time.time() if now is None else now)

    @property
    def wiped(self) -> bool:
        return self._wiped

    def _wipe(self) -> None:
        """Zera o material da chave na memória (melhor esforço).

        Só deve ser chamado com o lock de escrita do Keyset dono da chave.
        """
        self._wiped = True
        for i in range(len(self.value)):
            self.value[i] = 0


class Keyset:
    """Coleção ordenada de chaves com rotação e descriptografia multi-chave.

    A chave no índice 0 é a chave atual, usada em todas as novas
    criptografias. As seguintes são chaves aposentadas, da mais recente para a
    mais antiga, ainda aceitas na descriptografia até expirarem.

    encrypt/decrypt compartilham o lock de leitura; rotate_in/purge/cleanup
    tomam o lock de escrita.

    Attributes:
        type_id: Tag opaca definida pelo chamador, sem comportamento associado
    """

    def __init__(
        self,
        keys: Optional[Iterable[Key]] = None,
        type_id: int = 0,
        cipher: Optional[AuthenticatedCipher] = None,
        clock: Optional[Callable[[], float]] = None,
        logger: Optional[logging.Logger] = None,
        default_expire_after: Optional[Duration] = None,
    ):
        self.type_id = type_id
        self._keys: List[Key] = list(keys or [])
        self._cipher = cipher or DEFAULT_CIPHER
        self._clock = clock or time.time
        self._logger = logger or logging.getLogger(__name__)
        self._default_expire_after = default_expire_after
        self._lock = ReadWriteLock()

        self._stats = {
            "encryptions": AtomicCounter(),
            "decryptions": AtomicCounter(),
            "decryption_failures": AtomicCounter(),
            "rotations": AtomicCounter(),
            "purged_keys": AtomicCounter(),
        }

    @classmethod
    def new_empty(cls, **kwargs) -> "Keyset":
        """Cria um keyset sem chaves."""
        return cls(**kwargs)

    @classmethod
    def with_key(cls, key: Key, **kwargs) -> "Keyset":
        """Cria um keyset com ``key`` como chave atual."""
        return cls([key], **kwargs)

    @classmethod
    def from_config(cls, config: KeysetConfig, key: Optional[Key] = None, **kwargs) -> "Keyset":
        """Cria um keyset usando cifra, type_id, grace e logger da configuração."""
        kwargs.setdefault("cipher", config.create_cipher())
        kwargs.setdefault("type_id", config.type_id)
        kwargs.setdefault("logger", config.logger)
        kwargs.setdefault("default_expire_after", config.rotation_grace)
        return cls([key] if key is not None else None, **kwargs)

    @property
    def keys(self) -> Tuple[Key, ...]:
        """Snapshot das chaves, da atual para a mais antiga."""
        with self._lock.read_locked():
            return tuple(self._keys)

    @property
    def current_key(self) -> Optional[Key]:
        with self._lock.read_locked():
            return self._keys[0] if self._keys else None

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._keys)

    def __repr__(self) -> str:
        return f"<Keyset type_id={self.type_id} keys={len(self)}>"

    def encrypt(self, plaintext: bytes) -> bytes:
        """Criptografa com a chave atual, sem fallback para chaves antigas.

        Args:
            plaintext: Dados em texto plano

        Returns:
            bytes: Saída da cifra (nonce e tag embutidos)

        Raises:
            EmptyKeysetError: Se o keyset não tiver chaves
            NoValidKeyError: Se a chave atual estiver expirada ou zerada
            PrimitiveError: Se a cifra rejeitar a chave
        """
        with self._lock.read_locked():
            if not self._keys:
                self._logger.warning("Criptografia recusada: keyset vazio")
                raise EmptyKeysetError("Keyset inválido: vazio")

            current = self._keys[0]
            if current.wiped or is_expired(current, self._clock()):
                self._logger.warning("Criptografia recusada: chave atual expirada")
                raise NoValidKeyError("Nenhuma chave válida no keyset")

            ciphertext = self._cipher.seal(plaintext, bytes(current.value))

        self._stats["encryptions"].increment()
        return ciphertext

    def decrypt(self, ciphertext: bytes) -> bytes:
        """Descriptografa tentando cada chave não expirada, da mais nova à mais antiga.

        Retorna o primeiro resultado bem-sucedido. Falhas individuais por chave
        são descartadas; apenas a falha agregada é reportada.

        Raises:
            NoValidDecryptionKeyError: Se nenhuma chave válida descriptografar
        """
        with self._lock.read_locked():
            now = self._clock()
            for key in self._keys:
                if key.wiped or is_expired(key, now):
                    continue
                try:
                    plaintext = self._cipher.open(ciphertext, bytes(key.value))
                except PrimitiveError:
                    continue

                self._stats["decryptions"].increment()
                return plaintext

        self._stats["decryption_failures"].increment()
        self._logger.debug("Falha ao descriptografar com as chaves do keyset")
        raise NoValidDecryptionKeyError("Nenhuma chave válida para descriptografia")

    def rotate_in(self, key: Key, expire_after: Optional[Duration] = None) -> None:
        """Torna ``key`` a chave atual e agenda a expiração da anterior.

        A chave atual anterior passa a expirar em ``now + expire_after``,
        sobrescrevendo qualquer expiração existente. Chaves já aposentadas não
        são alteradas. Zero ou negativo aposenta a chave anterior imediatamente.

        Args:
            key: Nova chave atual
            expire_after: Segundos ou timedelta; se None usa o padrão do keyset

        Raises:
            ValueError: Se expire_after for None sem padrão configurado, ou não finito
        """
        if expire_after is None:
            expire_after = self._default_expire_after
        if expire_after is None:
            raise ValueError("expire_after não informado e keyset sem rotation_grace padrão")
        grace = to_seconds(expire_after)

        with self._lock.write_locked():
            if self._keys:
                expires_at = self._clock() + grace
                if expires_at == 0:
                    # 0 significa "nunca expira"
                    expires_at = math.nextafter(0.0, -math.inf)
                self._keys[0].expires_at = expires_at
            self._keys.insert(0, key)
            total = len(self._keys)

        self._stats["rotations"].increment()
        self._logger.info(f"Nova chave rotacionada (keyset com {total} chaves, grace={grace:.0f}s)")

    def rotate(
        self,
        expire_after: Optional[Duration] = None,
        random_source: Optional[SecureRandomSource] = None,
    ) -> Key:
        """Gera uma chave aleatória e a rotaciona como chave atual.

        Returns:
            Key: A nova chave atual
        """
        key = Key.new_random(random_source)
        self.rotate_in(key, expire_after)
        return key

    def purge(self) -> int:
        """Remove as chaves expiradas, preservando a ordem das restantes.

        Returns:
            int: Número de chaves removidas
        """
        with self._lock.write_locked():
            now = self._clock()
            survivors = [k for k in self._keys if not is_expired(k, now)]
            removed = len(self._keys) - len(survivors)
            self._keys[:] = survivors

        if removed:
            self._stats["purged_keys"].increment(removed)
            self._logger.info(f"{removed} chave(s) expirada(s) removida(s) do keyset")
        return removed

    def get_statistics(self) -> dict:
        """Retorna estatísticas de uso.

        Examples:
            >>> stats = keyset.get_statistics()
            >>> print(f"Encryptions: {stats['encryptions']}")
        """
        return {name: counter.value() for name, counter in self._stats.items()}

    def cleanup(self) -> None:
        """Zera o material de todas as chaves e esvazia o keyset.

        Após cleanup() o keyset fica vazio; encrypt levanta EmptyKeysetError.
        """
        with self._lock.write_locked():
            for key in self._keys:
                key._wipe()
            self._keys.clear()

        self._logger.info("Material de chaves removido da memória")
