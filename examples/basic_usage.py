"""Exemplo básico de uso do KeysetManager."""

import logging

from keyset_manager import Key, Keyset, KeysetConfig, hash_for_string

# Configurar logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def main():
    """Demonstra uso básico de um Keyset."""

    print("\n=== KeysetManager - Exemplo Básico ===\n")

    # 1. Criar configuração
    print("1. Criando configuração...")
    config = KeysetConfig(rotation_grace=3600, logger=logger)
    print(f"   Cifra: {config.cipher_backend}, grace: {config.rotation_grace:.0f}s")

    # 2. Criar keyset com uma chave aleatória
    print("\n2. Criando keyset com chave aleatória...")
    keyset = Keyset.from_config(config, Key.new_random())
    print(f"   {keyset}")

    # 3. Criptografar dados
    print("\n3. Criptografando dados sensíveis...")
    plaintext = b"Informacao confidencial"
    ciphertext = keyset.encrypt(plaintext)
    print(f"   Plaintext:  {plaintext}")
    print(f"   Ciphertext: {ciphertext[:50]}...")  # Mostra apenas primeiros 50 bytes

    # 4. Descriptografar dados
    print("\n4. Descriptografando dados...")
    decrypted = keyset.decrypt(ciphertext)
    print(f"   Decrypted: {decrypted}")

    assert decrypted == plaintext, "Erro: dados descriptografados não conferem!"

    # 5. Chave derivada de um segredo externo (NÃO use para senhas)
    print("\n5. Keyset com chave derivada de segredo armazenado...")
    prime = Keyset.with_key(Key.from_material(hash_for_string("segredo-externo")))
    ct = prime.encrypt(b"keyset serializado")
    print(f"   ✓ Recuperado: {prime.decrypt(ct).decode()}")

    # 6. Estatísticas
    print("\n6. Estatísticas de uso:")
    for key, value in keyset.get_statistics().items():
        print(f"   {key}: {value}")

    # 7. Limpar material criptográfico sensível
    print("\n7. Limpando material sensível da memória...")
    keyset.cleanup()
    prime.cleanup()
    print("   ✓ Limpeza de segurança concluída")

    print("\n=== Fim do exemplo ===\n")


if __name__ == "__main__":
    main()
