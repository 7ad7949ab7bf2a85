"""
Key material helpers: JWK generation, signing key validation and resolution
"""

import hashlib
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, ed25519

from .encoding import canonical_json, encode_bytes
from .errors import ErrorCodes, MalformedKeyError, NoSigningKeyError, UnsupportedAlgorithmError

logger = logging.getLogger(__name__)

# key algorithm -> (curve, JOSE alg, coordinate size)
EC_KEY_ALGORITHMS = {
    "secp256k1": (ec.SECP256K1, "ES256K", 32),
    "P-256": (ec.SECP256R1, "ES256", 32),
}

SUPPORTED_KEY_ALGORITHMS = ("Ed25519", "secp256k1", "P-256")

PRIVATE_JWK_MEMBERS = ("d",)


@dataclass(frozen=True)
class SigningKey:
    """
    Private JWK with its required algorithm and curve tags

    Build instances with :meth:`from_jwk` so that a key lacking either tag
    fails at the boundary instead of deep inside a signer.
    """

    algorithm: str
    curve: str
    jwk: Dict[str, Any]

    @classmethod
    def from_jwk(cls, jwk: Optional[Dict[str, Any]]) -> "SigningKey":
        if not isinstance(jwk, dict):
            raise MalformedKeyError("Private key must be a JWK object")

        algorithm = jwk.get("alg")
        curve = jwk.get("crv")
        if not isinstance(algorithm, str) or not algorithm:
            raise MalformedKeyError("Private key JWK is missing its algorithm (alg)")
        if not isinstance(curve, str) or not curve:
            raise MalformedKeyError("Private key JWK is missing its curve (crv)")
        if not jwk.get("d"):
            raise MalformedKeyError(f"{algorithm}:{curve} JWK has no private key material (d)")

        return cls(algorithm=algorithm, curve=curve, jwk=dict(jwk))

    @property
    def algorithm_id(self) -> str:
        return f"{self.algorithm}:{self.curve}"


@dataclass(frozen=True)
class ResolvedKey:
    """Primary signing key of an identity plus the identifiers a JWT needs"""

    signing_key: SigningKey
    algorithm_id: str
    key_id: str


def primary_signing_key(identity) -> ResolvedKey:
    """
    Resolve the key an identity signs with

    The primary key is the first entry of the identity's verification method
    keys; its public identifier is the first verification method id of the
    identity's DID document.

    Args:
        identity: PortableDid (or anything exposing did, document, key_set)

    Returns:
        ResolvedKey with the validated private key, composite algorithm id and kid

    Raises:
        NoSigningKeyError: If the identity has no key entries or no verification method
        MalformedKeyError: If the private JWK lacks its alg/crv tags
    """
    key_entries = identity.key_set.verification_method_keys
    if not key_entries:
        raise NoSigningKeyError(f"No verification method keys found for {identity.did}", ErrorCodes.NO_SIGNING_KEY)

    signing_key = SigningKey.from_jwk(key_entries[0].private_key_jwk)

    methods = (identity.document or {}).get("verificationMethod") or []
    if not methods or not methods[0].get("id"):
        raise NoSigningKeyError(f"DID document for {identity.did} has no verification method")

    return ResolvedKey(signing_key=signing_key, algorithm_id=signing_key.algorithm_id, key_id=methods[0]["id"])


def compute_jwk_thumbprint(jwk: Dict[str, Any]) -> str:
    """
    Compute the RFC 7638 SHA-256 thumbprint of a JWK

    Returns:
        Base64url encoded thumbprint
    """
    if jwk.get("kty") == "EC":
        members = {k: jwk[k] for k in ("crv", "kty", "x", "y")}
    elif jwk.get("kty") == "OKP":
        members = {k: jwk[k] for k in ("crv", "kty", "x")}
    else:
        raise MalformedKeyError(f"Unsupported key type: {jwk.get('kty')}")

    return encode_bytes(hashlib.sha256(canonical_json(members).encode("utf-8")).digest())


def generate_private_jwk(key_algorithm: str = "Ed25519") -> Dict[str, Any]:
    """
    Generate a new private key as a JWK

    Args:
        key_algorithm: 'Ed25519', 'secp256k1' or 'P-256'

    Returns:
        Private JWK carrying kty, crv, alg, kid, x (and y for EC keys) and d
    """
    if key_algorithm == "Ed25519":
        private_key = ed25519.Ed25519PrivateKey.generate()
        jwk = {
            "kty": "OKP",
            "crv": "Ed25519",
            "alg": "EdDSA",
            "x": encode_bytes(
                private_key.public_key().public_bytes(
                    encoding=serialization.Encoding.Raw, format=serialization.PublicFormat.Raw
                )
            ),
            "d": encode_bytes(
                private_key.private_bytes(
                    encoding=serialization.Encoding.Raw,
                    format=serialization.PrivateFormat.Raw,
                    encryption_algorithm=serialization.NoEncryption(),
                )
            ),
        }
    elif key_algorithm in EC_KEY_ALGORITHMS:
        curve, alg, coord_size = EC_KEY_ALGORITHMS[key_algorithm]
        private_key = ec.generate_private_key(curve())
        numbers = private_key.private_numbers()

        # Convert coordinates to base64url encoding
        def coord_to_base64url(value, size):
            return encode_bytes(value.to_bytes(size, "big"))

        jwk = {
            "kty": "EC",
            "crv": key_algorithm,
            "alg": alg,
            "x": coord_to_base64url(numbers.public_numbers.x, coord_size),
            "y": coord_to_base64url(numbers.public_numbers.y, coord_size),
            "d": coord_to_base64url(numbers.private_value, coord_size),
        }
    else:
        raise UnsupportedAlgorithmError(key_algorithm, ErrorCodes.UNSUPPORTED_KEY_ALGORITHM)

    jwk["kid"] = compute_jwk_thumbprint(jwk)
    logger.debug("Generated %s key %s", key_algorithm, jwk["kid"])
    return jwk


def public_jwk(private_jwk: Dict[str, Any]) -> Dict[str, Any]:
    """Strip private members from a JWK"""
    return {k: v for k, v in private_jwk.items() if k not in PRIVATE_JWK_MEMBERS}
