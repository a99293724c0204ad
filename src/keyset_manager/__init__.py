"""KeysetManager - Keysets thread-safe com rotação e expiração de chaves.

Este pacote fornece:
- Criptografia autenticada AES-256-GCM ou ChaCha20-Poly1305
- Keysets ordenados por recência com rotação e período de carência
- Descriptografia transparente com chaves aposentadas ainda válidas
- Remoção (purge) de chaves expiradas
- Lock de leitura/escrita para acesso concorrente
"""

from .cipher import (
    AESGCMCipher,
    AuthenticatedCipher,
    ChaCha20Poly1305Cipher,
    OSRandomSource,
    SecureRandomSource,
    generate_random_bytes,
    hash_for_string,
)
from .config import KeysetConfig
from .errors import (
    EmptyKeysetError,
    KeysetError,
    KeysetNotFoundError,
    NoValidDecryptionKeyError,
    NoValidKeyError,
    PrimitiveError,
    RandomSourceError,
)
from .keyset import Key, Keyset, is_expired
from .store import CryptoKeyStore, MemoryKeyStore

__version__ = "0.1.0"

__all__ = [
    # Classes principais
    "Key",
    "Keyset",
    "is_expired",
    # Erros
    "KeysetError",
    "EmptyKeysetError",
    "NoValidKeyError",
    "NoValidDecryptionKeyError",
    "PrimitiveError",
    "RandomSourceError",
    "KeysetNotFoundError",
    # Primitivas
    "AuthenticatedCipher",
    "AESGCMCipher",
    "ChaCha20Poly1305Cipher",
    "SecureRandomSource",
    "OSRandomSource",
    "generate_random_bytes",
    "hash_for_string",
    # Configuração e armazenamento
    "KeysetConfig",
    "CryptoKeyStore",
    "MemoryKeyStore",
]
