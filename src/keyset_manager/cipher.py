"""Primitivas de criptografia autenticada consumidas pelo Keyset.

Formato do ciphertext: [nonce 12B][payload criptografado + tag 16B]
"""

import hashlib
import secrets
from typing import Protocol

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM, ChaCha20Poly1305

from .errors import PrimitiveError, RandomSourceError

NONCE_SIZE = 12  # 96-bit nonce
TAG_SIZE = 16
KEY_SIZE = 32  # 256 bits


class SecureRandomSource(Protocol):
    """Fonte de bytes aleatórios criptograficamente seguros."""

    def bytes(self, n: int) -> bytes:
        ...


class AuthenticatedCipher(Protocol):
    """Criptografia autenticada com nonce embutido na saída."""

    def seal(self, plaintext: bytes, key: bytes) -> bytes:
        ...

    def open(self, ciphertext: bytes, key: bytes) -> bytes:
        ...


class OSRandomSource:
    """Fonte aleatória do sistema operacional (via ``secrets``)."""

    def bytes(self, n: int) -> bytes:
        """Retorna ``n`` bytes aleatórios.

        Raises:
            RandomSourceError: Se a entropia não puder ser obtida
        """
        try:
            return secrets.token_bytes(n)
        except (OSError, NotImplementedError) as e:
            raise RandomSourceError(f"Falha ao gerar {n} bytes aleatórios") from e


DEFAULT_RANDOM_SOURCE = OSRandomSource()


class _AEADCipher:
    """Base para cifras AEAD do pacote ``cryptography``.

    Subclasses definem ``aead_cls``, a classe AEAD que recebe a chave no
    construtor e expõe ``encrypt(nonce, data, aad)`` e ``decrypt(nonce, data, aad)``.
    """

    aead_cls: type = AESGCM
    name = "aead"

    def __init__(self, random_source: SecureRandomSource | None = None) -> None:
        self._random = random_source or DEFAULT_RANDOM_SOURCE

    def _aead(self, key: bytes):
        try:
            return self.aead_cls(bytes(key))
        except (ValueError, TypeError) as e:
            raise PrimitiveError(f"Chave inválida para {self.name}: {len(key)} bytes") from e

    def seal(self, plaintext: bytes, key: bytes) -> bytes:
        aead = self._aead(key)
        nonce = self._random.bytes(NONCE_SIZE)
        return nonce + aead.encrypt(nonce, plaintext, None)

    def open(self, ciphertext: bytes, key: bytes) -> bytes:
        _min = NONCE_SIZE + TAG_SIZE
        if len(ciphertext) < _min:
            raise PrimitiveError(
                f"Ciphertext muito curto: {len(ciphertext)} bytes (mínimo {_min})"
            )
        aead = self._aead(key)
        nonce, payload = ciphertext[:NONCE_SIZE], ciphertext[NONCE_SIZE:]
        try:
            return aead.decrypt(nonce, payload, None)
        except InvalidTag as e:
            raise PrimitiveError("Falha de autenticação do ciphertext") from e


class AESGCMCipher(_AEADCipher):
    """AES-256-GCM."""

    aead_cls = AESGCM
    name = "aesgcm"


class ChaCha20Poly1305Cipher(_AEADCipher):
    """ChaCha20-Poly1305."""

    aead_cls = ChaCha20Poly1305
    name = "chacha20"


CIPHER_BACKENDS = {
    AESGCMCipher.name: AESGCMCipher,
    ChaCha20Poly1305Cipher.name: ChaCha20Poly1305Cipher,
}

DEFAULT_CIPHER = AESGCMCipher()


def seal(plaintext: bytes, key: bytes) -> bytes:
    """Criptografa com AES-256-GCM (criptografa e autentica).

    NOTA: Use apenas para chaves secretas armazenadas com segurança.

    Args:
        plaintext: Dados em texto plano
        key: Chave de 32 bytes

    Returns:
        bytes: nonce + ciphertext + tag

    Raises:
        PrimitiveError: Se a chave tiver tamanho inválido
    """
    return DEFAULT_CIPHER.seal(plaintext, key)


def open(ciphertext: bytes, key: bytes) -> bytes:  # noqa: A001
    """Descriptografa um valor produzido por :func:`seal`.

    Raises:
        PrimitiveError: Se a tag não verificar, a entrada for curta demais
            ou a chave tiver tamanho inválido
    """
    return DEFAULT_CIPHER.open(ciphertext, key)


def generate_random_bytes(n: int, random_source: SecureRandomSource | None = None) -> bytes:
    """Gera ``n`` bytes pseudo-aleatórios criptograficamente seguros."""
    return (random_source or DEFAULT_RANDOM_SOURCE).bytes(n)


def hash_for_string(value: str) -> bytes:
    """Converte uma string em um hash de 256 bits utilizável como chave simétrica.

    NOTA: Serve para segredos armazenados com segurança. NÃO use para senhas.

    Examples:
        >>> len(hash_for_string("segredo"))
        32
    """
    return hashlib.sha256(value.encode("utf-8")).digest()
