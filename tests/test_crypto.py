#!/usr/bin/env python3
"""
Cryptographic Operations Tests for tbDEX DevTools

Tests the algorithm registry and every registered signer.
"""

import asyncio
import os
import sys
import unittest

# Add src directory to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from tbdex_devtools.crypto import (
    ALGORITHM_REGISTRY,
    SECP256K1_ORDER,
    Ed25519Signer,
    JoseEcdsaSigner,
    Secp256k1Signer,
    algorithm_id_for,
    resolve_algorithm,
)
from tbdex_devtools.errors import ErrorCodes, UnsupportedAlgorithmError
from tbdex_devtools.keys import generate_private_jwk, public_jwk


class TestAlgorithmRegistry(unittest.TestCase):
    """Test algorithm lookup"""

    def test_registered_algorithms(self):
        """Test that the expected composite ids are registered"""
        self.assertEqual(set(ALGORITHM_REGISTRY), {"ES256K:secp256k1", "EdDSA:Ed25519", "ES256:P-256"})

    def test_descriptor_ids_match_keys(self):
        """Test that every descriptor is registered under its own id"""
        for algorithm_id, descriptor in ALGORITHM_REGISTRY.items():
            self.assertEqual(descriptor.id, algorithm_id)

    def test_resolve_labels(self):
        """Test JOSE labels of registered algorithms"""
        self.assertEqual(resolve_algorithm("ES256K:secp256k1").label, "ES256K")
        self.assertEqual(resolve_algorithm("EdDSA:Ed25519").label, "EdDSA")
        self.assertEqual(resolve_algorithm("ES256:P-256").label, "ES256")

    def test_resolve_signers(self):
        """Test signer types of registered algorithms"""
        self.assertIsInstance(resolve_algorithm("ES256K:secp256k1").signer, Secp256k1Signer)
        self.assertIsInstance(resolve_algorithm("EdDSA:Ed25519").signer, Ed25519Signer)
        self.assertIsInstance(resolve_algorithm("ES256:P-256").signer, JoseEcdsaSigner)

    def test_unsupported_algorithm(self):
        """Test that a lookup miss raises with the unresolved id"""
        with self.assertRaises(UnsupportedAlgorithmError) as context:
            resolve_algorithm("RS256:none")

        self.assertEqual(context.exception.code, ErrorCodes.UNSUPPORTED_ALGORITHM)
        self.assertEqual(context.exception.algorithm_id, "RS256:none")
        self.assertIn("RS256:none", str(context.exception))

    def test_lookup_is_exact(self):
        """Test that near-miss ids do not resolve"""
        for algorithm_id in ["ES256K", "es256k:secp256k1", "ES256K:secp256k1 ", "EdDSA:X25519"]:
            with self.assertRaises(UnsupportedAlgorithmError):
                resolve_algorithm(algorithm_id)

    def test_registry_is_read_only(self):
        """Test that the registry cannot be mutated"""
        with self.assertRaises(TypeError):
            ALGORITHM_REGISTRY["RS256:none"] = ALGORITHM_REGISTRY["EdDSA:Ed25519"]

    def test_algorithm_id_for(self):
        """Test composite id construction"""
        self.assertEqual(algorithm_id_for("ES256K", "secp256k1"), "ES256K:secp256k1")


class TestSigners(unittest.TestCase):
    """Test sign/verify for each registered algorithm"""

    KEY_ALGORITHMS = {
        "secp256k1": "ES256K:secp256k1",
        "Ed25519": "EdDSA:Ed25519",
        "P-256": "ES256:P-256",
    }

    def test_sign_and_verify(self):
        """Test that signatures verify with the public key"""

        async def run_test():
            for key_algorithm, algorithm_id in self.KEY_ALGORITHMS.items():
                descriptor = resolve_algorithm(algorithm_id)
                private_key_jwk = generate_private_jwk(key_algorithm)
                data = b"header.payload"

                signature = await descriptor.signer.sign(key=private_key_jwk, data=data, options=descriptor.options)
                self.assertEqual(len(signature), 64, key_algorithm)

                self.assertTrue(
                    await descriptor.signer.verify(
                        key=public_jwk(private_key_jwk), signature=signature, data=data, options=descriptor.options
                    ),
                    key_algorithm,
                )
                self.assertFalse(
                    await descriptor.signer.verify(
                        key=public_jwk(private_key_jwk), signature=signature, data=b"tampered", options=descriptor.options
                    ),
                    key_algorithm,
                )

        asyncio.run(run_test())

    def test_wrong_key_fails_verification(self):
        """Test that another key's public JWK does not verify a signature"""

        async def run_test():
            for key_algorithm, algorithm_id in self.KEY_ALGORITHMS.items():
                descriptor = resolve_algorithm(algorithm_id)
                signer_jwk = generate_private_jwk(key_algorithm)
                other_jwk = generate_private_jwk(key_algorithm)

                signature = await descriptor.signer.sign(key=signer_jwk, data=b"data", options=descriptor.options)
                self.assertFalse(
                    await descriptor.signer.verify(
                        key=public_jwk(other_jwk), signature=signature, data=b"data", options=descriptor.options
                    ),
                    key_algorithm,
                )

        asyncio.run(run_test())

    def test_secp256k1_low_s(self):
        """Test that ES256K signatures are low-S normalised"""

        async def run_test():
            descriptor = resolve_algorithm("ES256K:secp256k1")
            private_key_jwk = generate_private_jwk("secp256k1")
            for i in range(16):
                signature = await descriptor.signer.sign(
                    key=private_key_jwk, data=f"message {i}".encode(), options=descriptor.options
                )
                s = int.from_bytes(signature[32:], "big")
                self.assertLessEqual(s, SECP256K1_ORDER // 2)

        asyncio.run(run_test())

    def test_secp256k1_rejects_short_signature(self):
        """Test that truncated ES256K signatures fail verification"""

        async def run_test():
            descriptor = resolve_algorithm("ES256K:secp256k1")
            private_key_jwk = generate_private_jwk("secp256k1")
            signature = await descriptor.signer.sign(key=private_key_jwk, data=b"data", options=descriptor.options)
            self.assertFalse(
                await descriptor.signer.verify(
                    key=public_jwk(private_key_jwk), signature=signature[:-1], data=b"data", options=descriptor.options
                )
            )

        asyncio.run(run_test())

    def test_unsupported_hash_option(self):
        """Test that an unknown hash option is rejected by the ECDSA signers"""

        async def run_test():
            for signer, key_algorithm in [(Secp256k1Signer(), "secp256k1"), (JoseEcdsaSigner(), "P-256")]:
                with self.assertRaises(ValueError):
                    await signer.sign(key=generate_private_jwk(key_algorithm), data=b"data", options={"hash": "MD5"})

        asyncio.run(run_test())

    def test_signer_does_not_mutate_key(self):
        """Test that signing leaves the borrowed JWK untouched"""

        async def run_test():
            for key_algorithm, algorithm_id in self.KEY_ALGORITHMS.items():
                descriptor = resolve_algorithm(algorithm_id)
                private_key_jwk = generate_private_jwk(key_algorithm)
                snapshot = dict(private_key_jwk)
                await descriptor.signer.sign(key=private_key_jwk, data=b"data", options=descriptor.options)
                self.assertEqual(private_key_jwk, snapshot)

        asyncio.run(run_test())


if __name__ == "__main__":
    unittest.main()
