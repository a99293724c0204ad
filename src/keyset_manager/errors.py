"""Hierarquia de erros do KeysetManager.

Nenhuma mensagem de erro carrega material de chave, plaintext ou a
identificação de qual chave falhou.
"""


class KeysetError(Exception):
    """Erro base do gerenciador de keysets."""

    pass


class EmptyKeysetError(KeysetError):
    """Operação de criptografia em um keyset sem chaves."""

    pass


class NoValidKeyError(KeysetError):
    """A chave atual (índice 0) está expirada."""

    pass


class NoValidDecryptionKeyError(KeysetError):
    """Nenhuma chave não expirada conseguiu descriptografar o valor."""

    pass


class PrimitiveError(KeysetError):
    """A primitiva de criptografia rejeitou a chave ou a entrada."""

    pass


class RandomSourceError(KeysetError):
    """Falha ao obter bytes aleatórios da fonte segura."""

    pass


class KeysetNotFoundError(KeysetError, KeyError):
    """Keyset não encontrado no store."""

    pass
