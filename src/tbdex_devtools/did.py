"""
Portable DIDs: an identifier, its DID document and the private keys behind it
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

import base58
from jose.utils import base64url_decode

from .errors import ErrorCodes, UnsupportedDidMethodError
from .keys import generate_private_jwk, public_jwk

logger = logging.getLogger(__name__)

DEFAULT_DID_METHOD = "key"
DEFAULT_KEY_ALGORITHM = "Ed25519"

# multicodec varint prefixes for public keys
MULTICODEC_PREFIXES = {
    "Ed25519": bytes([0xED, 0x01]),
    "secp256k1": bytes([0xE7, 0x01]),
    "P-256": bytes([0x80, 0x24]),
}

VERIFICATION_RELATIONSHIPS = ["authentication", "assertionMethod", "capabilityDelegation", "capabilityInvocation"]

DID_CONTEXT = ["https://www.w3.org/ns/did/v1", "https://w3id.org/security/suites/jws-2020/v1"]


@dataclass
class VerificationMethodKey:
    """Key pair behind one verification method of a DID document"""

    public_key_jwk: Dict[str, Any]
    private_key_jwk: Dict[str, Any]
    relationships: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "publicKeyJwk": self.public_key_jwk,
            "privateKeyJwk": self.private_key_jwk,
            "relationships": list(self.relationships),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> VerificationMethodKey:
        return cls(
            public_key_jwk=data.get("publicKeyJwk", {}),
            private_key_jwk=data.get("privateKeyJwk", {}),
            relationships=data.get("relationships", []),
        )


@dataclass
class KeySet:
    """Ordered verification method keys; the first one signs"""

    verification_method_keys: List[VerificationMethodKey] = field(default_factory=list)


@dataclass
class PortableDid:
    """A DID together with its document and key set"""

    did: str
    document: Dict[str, Any]
    key_set: KeySet

    def to_dict(self) -> Dict[str, Any]:
        return {
            "did": self.did,
            "document": self.document,
            "keySet": {"verificationMethodKeys": [k.to_dict() for k in self.key_set.verification_method_keys]},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> PortableDid:
        key_set = data.get("keySet") or {}
        return cls(
            did=data["did"],
            document=data.get("document") or {},
            key_set=KeySet(
                verification_method_keys=[
                    VerificationMethodKey.from_dict(k) for k in key_set.get("verificationMethodKeys", [])
                ]
            ),
        )


def public_key_bytes(jwk: Dict[str, Any]) -> bytes:
    """
    Raw public key bytes as did:key encodes them

    Ed25519 keys are the 32-byte point, EC keys the 33-byte compressed point.
    """
    x = base64url_decode(jwk["x"].encode("ascii"))
    if jwk.get("kty") == "OKP":
        return x

    y = base64url_decode(jwk["y"].encode("ascii"))
    prefix = b"\x03" if y[-1] & 1 else b"\x02"
    return prefix + x


def create_did_key(key_algorithm: str = DEFAULT_KEY_ALGORITHM) -> PortableDid:
    """
    Create a did:key backed by a freshly generated key

    Args:
        key_algorithm: 'Ed25519', 'secp256k1' or 'P-256'

    Returns:
        PortableDid with a single JsonWebKey2020 verification method
    """
    private_key_jwk = generate_private_jwk(key_algorithm)
    public_key_jwk = public_jwk(private_key_jwk)

    multicodec_bytes = MULTICODEC_PREFIXES[key_algorithm] + public_key_bytes(public_key_jwk)
    multibase = f"z{base58.b58encode(multicodec_bytes).decode('ascii')}"
    did = f"did:key:{multibase}"
    method_id = f"{did}#{multibase}"

    document: Dict[str, Any] = {
        "@context": list(DID_CONTEXT),
        "id": did,
        "verificationMethod": [
            {
                "id": method_id,
                "type": "JsonWebKey2020",
                "controller": did,
                "publicKeyJwk": public_key_jwk,
            }
        ],
    }
    for relationship in VERIFICATION_RELATIONSHIPS:
        document[relationship] = [method_id]

    logger.debug("Created %s (%s)", did, key_algorithm)
    return PortableDid(
        did=did,
        document=document,
        key_set=KeySet(
            verification_method_keys=[
                VerificationMethodKey(
                    public_key_jwk=public_key_jwk,
                    private_key_jwk=private_key_jwk,
                    relationships=list(VERIFICATION_RELATIONSHIPS),
                )
            ]
        ),
    )


def create_did(did_method: str = DEFAULT_DID_METHOD, key_algorithm: str = DEFAULT_KEY_ALGORITHM) -> PortableDid:
    """
    Create a portable DID

    Args:
        did_method: DID method to create, only 'key' is available
        key_algorithm: Key algorithm for the DID's verification method

    Raises:
        UnsupportedDidMethodError: For any method other than 'key'
    """
    if did_method == "key":
        return create_did_key(key_algorithm)

    raise UnsupportedDidMethodError(f"{did_method} method not implemented.", ErrorCodes.UNSUPPORTED_DID_METHOD)
