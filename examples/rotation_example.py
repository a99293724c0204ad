"""Exemplo de rotação de chaves com KeysetManager."""

import logging
from datetime import timedelta

from keyset_manager import Key, Keyset, MemoryKeyStore, NoValidDecryptionKeyError

# Configurar logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def main():
    """Demonstra rotação, carência e purge de chaves."""

    print("\n=== KeysetManager - Rotação de Chaves ===\n")

    store = MemoryKeyStore()

    # 1. Keyset inicial com uma chave
    print("1. Criando keyset inicial...")
    store.put("documentos", Keyset.with_key(Key.new_random(), logger=logger))
    keyset = store.get("documentos")

    # 2. Criptografar dados com a primeira chave
    print("\n2. Criptografando dados com a chave atual...")
    old_data = [b"Documento antigo 1", b"Documento antigo 2"]
    old_ciphertexts = [keyset.encrypt(d) for d in old_data]
    for d in old_data:
        print(f"   ✓ Criptografado: {d.decode()}")

    # 3. Rotacionar com 1 hora de carência
    print("\n3. Rotacionando nova chave (carência de 1 hora)...")
    keyset.rotate(timedelta(hours=1))
    print(f"   Chaves no keyset: {len(keyset)}")

    # 4. Dados antigos continuam legíveis
    print("\n4. Testando backward compatibility...")
    for ct in old_ciphertexts:
        print(f"   ✓ Recuperado: {keyset.decrypt(ct).decode()}")

    # 5. Novos dados usam a nova chave
    print("\n5. Criptografando novos dados...")
    new_ciphertext = keyset.encrypt(b"Documento novo")
    print(f"   ✓ Recuperado: {keyset.decrypt(new_ciphertext).decode()}")

    # 6. Rotação com carência negativa aposenta a chave anterior imediatamente
    print("\n6. Rotação imediata (carência negativa)...")
    keyset.rotate(-1)
    try:
        keyset.decrypt(new_ciphertext)
    except NoValidDecryptionKeyError:
        print("   ✓ Chave anterior aposentada; dados re-criptografados são necessários")

    # 7. Purge das chaves expiradas
    print("\n7. Removendo chaves expiradas...")
    removed = keyset.purge()
    print(f"   Removidas: {removed}, restantes: {len(keyset)}")

    # 8. Estatísticas finais
    print("\n8. Estatísticas finais:")
    for key, value in keyset.get_statistics().items():
        print(f"   {key}: {value}")

    keyset.cleanup()
    print("\n=== Fim do exemplo de rotação ===\n")


if __name__ == "__main__":
    main()
