"""
Signature algorithms and the registry that selects them from key material

Every supported algorithm is registered once, keyed by the composite id
"<alg>:<crv>" read off a private JWK (e.g. "ES256K:secp256k1").
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec, ed25519
from cryptography.hazmat.primitives.asymmetric.utils import decode_dss_signature, encode_dss_signature
from jose.backends import ECKey
from jose.constants import ALGORITHMS
from jose.utils import base64url_decode

from .errors import UnsupportedAlgorithmError
from .keys import public_jwk

logger = logging.getLogger(__name__)

SECP256K1_ORDER = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141

HASH_ALGORITHMS = {
    "SHA-256": hashes.SHA256,
    "SHA-384": hashes.SHA384,
    "SHA-512": hashes.SHA512,
}


def _jwk_int(jwk: Dict[str, Any], member: str) -> int:
    return int.from_bytes(base64url_decode(jwk[member].encode("ascii")), "big")


def _jwk_bytes(jwk: Dict[str, Any], member: str) -> bytes:
    return base64url_decode(jwk[member].encode("ascii"))


def _hash_for(options: Mapping[str, Any]) -> hashes.HashAlgorithm:
    hash_name = options.get("hash", "SHA-256")
    if hash_name not in HASH_ALGORITHMS:
        raise ValueError(f"Unsupported hash: {hash_name}")
    return HASH_ALGORITHMS[hash_name]()


class Signer(ABC):
    """
    Signing capability bound to one algorithm

    Keys are JWK dicts borrowed for the duration of a single call; signers
    build their cryptography key objects locally and keep no reference.
    """

    @abstractmethod
    async def sign(self, key: Dict[str, Any], data: bytes, options: Mapping[str, Any]) -> bytes:
        """Sign data with a private JWK"""

    @abstractmethod
    async def verify(self, key: Dict[str, Any], signature: bytes, data: bytes, options: Mapping[str, Any]) -> bool:
        """Check a signature with a public (or private) JWK"""


class Secp256k1Signer(Signer):
    """ES256K: ECDSA over secp256k1, JOSE r || s output with low-S normalisation"""

    coord_size = 32

    async def sign(self, key, data, options):
        private_key = ec.derive_private_key(_jwk_int(key, "d"), ec.SECP256K1())
        r, s = decode_dss_signature(private_key.sign(data, ec.ECDSA(_hash_for(options))))
        if s > SECP256K1_ORDER // 2:
            s = SECP256K1_ORDER - s
        return r.to_bytes(self.coord_size, "big") + s.to_bytes(self.coord_size, "big")

    async def verify(self, key, signature, data, options):
        if len(signature) != 2 * self.coord_size:
            return False

        public_key = ec.EllipticCurvePublicNumbers(_jwk_int(key, "x"), _jwk_int(key, "y"), ec.SECP256K1()).public_key()
        r = int.from_bytes(signature[: self.coord_size], "big")
        s = int.from_bytes(signature[self.coord_size :], "big")
        try:
            public_key.verify(encode_dss_signature(r, s), data, ec.ECDSA(_hash_for(options)))
        except InvalidSignature:
            return False
        return True


class Ed25519Signer(Signer):
    """EdDSA over Ed25519"""

    async def sign(self, key, data, options):
        private_key = ed25519.Ed25519PrivateKey.from_private_bytes(_jwk_bytes(key, "d"))
        return private_key.sign(data)

    async def verify(self, key, signature, data, options):
        public_key = ed25519.Ed25519PublicKey.from_public_bytes(_jwk_bytes(key, "x"))
        try:
            public_key.verify(signature, data)
        except InvalidSignature:
            return False
        return True


class JoseEcdsaSigner(Signer):
    """ECDSA over the NIST curves, delegated to python-jose's EC backend"""

    jose_algorithms = {
        "SHA-256": ALGORITHMS.ES256,
        "SHA-384": ALGORITHMS.ES384,
        "SHA-512": ALGORITHMS.ES512,
    }

    def _jose_algorithm(self, options: Mapping[str, Any]) -> str:
        hash_name = options.get("hash", "SHA-256")
        if hash_name not in self.jose_algorithms:
            raise ValueError(f"Unsupported hash: {hash_name}")
        return self.jose_algorithms[hash_name]

    async def sign(self, key, data, options):
        return ECKey(key, self._jose_algorithm(options)).sign(data)

    async def verify(self, key, signature, data, options):
        return ECKey(public_jwk(key), self._jose_algorithm(options)).verify(data, signature)


@dataclass(frozen=True)
class AlgorithmDescriptor:
    """
    Registered signature algorithm

    Attributes:
        id: Composite "<alg>:<crv>" id the descriptor is registered under
        label: JOSE "alg" header value
        signer: Signing capability
        options: Parameters handed to the signer on every call
    """

    id: str
    label: str
    signer: Signer
    options: Mapping[str, Any]


def algorithm_id_for(alg: str, crv: str) -> str:
    """Build the composite registry id from a key's alg and crv tags"""
    return f"{alg}:{crv}"


def _register(*descriptors: AlgorithmDescriptor) -> Mapping[str, AlgorithmDescriptor]:
    registry: Dict[str, AlgorithmDescriptor] = {}
    for descriptor in descriptors:
        if descriptor.id in registry:
            raise ValueError(f"Duplicate algorithm id: {descriptor.id}")
        registry[descriptor.id] = descriptor
    return MappingProxyType(registry)


ALGORITHM_REGISTRY = _register(
    AlgorithmDescriptor(
        id=algorithm_id_for("ES256K", "secp256k1"),
        label="ES256K",
        signer=Secp256k1Signer(),
        options=MappingProxyType({"name": "ECDSA", "hash": "SHA-256"}),
    ),
    AlgorithmDescriptor(
        id=algorithm_id_for("EdDSA", "Ed25519"),
        label="EdDSA",
        signer=Ed25519Signer(),
        options=MappingProxyType({"name": "EdDSA"}),
    ),
    AlgorithmDescriptor(
        id=algorithm_id_for("ES256", "P-256"),
        label="ES256",
        signer=JoseEcdsaSigner(),
        options=MappingProxyType({"name": "ECDSA", "hash": "SHA-256"}),
    ),
)


def resolve_algorithm(algorithm_id: str) -> AlgorithmDescriptor:
    """
    Look up the descriptor registered for a composite algorithm id

    Raises:
        UnsupportedAlgorithmError: If nothing is registered under the id
    """
    descriptor = ALGORITHM_REGISTRY.get(algorithm_id)
    if descriptor is None:
        raise UnsupportedAlgorithmError(algorithm_id)

    logger.debug("Resolved %s to %s", algorithm_id, descriptor.label)
    return descriptor
