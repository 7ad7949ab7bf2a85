"""
Compact JWT creation and decoding

create_jwt picks the signature algorithm from the issuer's primary key,
decode_jwt splits a token back into its parts without verifying it.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .crypto import algorithm_id_for, resolve_algorithm
from .encoding import decode_to_bytes, decode_to_object, encode_bytes, encode_object
from .errors import ErrorCodes, JwtSigningError, JwtVerificationError, MalformedKeyError, MalformedTokenError
from .keys import primary_signing_key

logger = logging.getLogger(__name__)


@dataclass
class DecodedJwt:
    """
    Parts of a compact JWT

    Attributes:
        header: Decoded JOSE header
        payload: Decoded claims
        signature: Signature segment, still base64url encoded
    """

    header: Dict[str, Any]
    payload: Dict[str, Any]
    signature: str


def merge_claims(payload: Optional[Dict[str, Any]], iss: str, sub: str) -> Dict[str, Any]:
    """
    Merge the issuer and subject claims over a caller payload

    iss and sub always win: caller-supplied values for either are silently
    replaced, without raising.
    """
    claims = dict(payload or {})
    claims["iss"] = iss
    claims["sub"] = sub
    return claims


async def create_jwt(issuer, subject: str, payload: Optional[Dict[str, Any]] = None) -> str:
    """
    Create a compact JWT signed with the issuer's first verification method key

    Args:
        issuer: PortableDid of the signer
        subject: JWT subject (e.g. the holder's DID)
        payload: Additional claims

    Returns:
        Compact JWT "<header>.<payload>.<signature>"

    Raises:
        NoSigningKeyError: If the issuer has no key to sign with
        MalformedKeyError: If the issuer's key lacks its alg/crv tags
        UnsupportedAlgorithmError: If no signer is registered for the key's alg/crv
        JwtSigningError: If the signer fails
    """
    resolved = primary_signing_key(issuer)
    algorithm = resolve_algorithm(resolved.algorithm_id)

    encoded_header = encode_object({"alg": algorithm.label, "kid": resolved.key_id})
    encoded_payload = encode_object(merge_claims(payload, iss=issuer.did, sub=subject))

    signing_input = f"{encoded_header}.{encoded_payload}".encode("utf-8")

    try:
        signature = await algorithm.signer.sign(
            key=resolved.signing_key.jwk, data=signing_input, options=algorithm.options
        )
    except Exception as error:
        raise JwtSigningError(
            f"JWT signing failed in create_jwt ({algorithm.id}): {str(error)}", ErrorCodes.JWT_SIGNING_FAILED
        ) from error

    logger.debug("Created %s JWT for issuer %s, subject %s", algorithm.label, issuer.did, subject)
    return f"{encoded_header}.{encoded_payload}.{encode_bytes(signature)}"


def decode_jwt(compact_jwt: str) -> DecodedJwt:
    """
    Decode a compact JWT without verifying its signature

    Args:
        compact_jwt: The JWT to decode

    Returns:
        DecodedJwt with header and payload objects and the raw signature segment

    Raises:
        MalformedTokenError: If the token does not have three segments or a
            header/payload segment is not base64url-encoded JSON object
    """
    if not isinstance(compact_jwt, str):
        raise MalformedTokenError("JWT must be a string")

    segments = compact_jwt.split(".")
    if len(segments) != 3:
        raise MalformedTokenError(f"JWT must have 3 segments, found {len(segments)}")

    encoded_header, encoded_payload, encoded_signature = segments

    header = decode_to_object(encoded_header)
    if not isinstance(header, dict):
        raise MalformedTokenError("JWT header is not a JSON object")

    payload = decode_to_object(encoded_payload)
    if not isinstance(payload, dict):
        raise MalformedTokenError("JWT payload is not a JSON object")

    return DecodedJwt(header=header, payload=payload, signature=encoded_signature)


async def verify_jwt(compact_jwt: str, public_key_jwk: Dict[str, Any]) -> DecodedJwt:
    """
    Decode a compact JWT and verify its signature against a public JWK

    Args:
        compact_jwt: The JWT to verify
        public_key_jwk: Signer's public JWK, carrying alg and crv

    Returns:
        DecodedJwt of the verified token

    Raises:
        MalformedTokenError: If the token cannot be decoded
        MalformedKeyError: If the JWK lacks its alg/crv tags
        UnsupportedAlgorithmError: If no signer is registered for the key's alg/crv
        JwtVerificationError: If the header alg does not match the key or the signature is invalid
    """
    decoded = decode_jwt(compact_jwt)

    if not public_key_jwk.get("alg") or not public_key_jwk.get("crv"):
        raise MalformedKeyError("Public key JWK is missing its algorithm (alg) or curve (crv)")

    algorithm = resolve_algorithm(algorithm_id_for(public_key_jwk["alg"], public_key_jwk["crv"]))

    if decoded.header.get("alg") != algorithm.label:
        raise JwtVerificationError(
            f"JWT alg {decoded.header.get('alg')} does not match key algorithm {algorithm.label}",
            ErrorCodes.JWT_ALGORITHM_MISMATCH,
        )

    encoded_header, encoded_payload, _ = compact_jwt.split(".")
    signing_input = f"{encoded_header}.{encoded_payload}".encode("utf-8")
    signature = decode_to_bytes(decoded.signature)

    if not await algorithm.signer.verify(
        key=public_key_jwk, signature=signature, data=signing_input, options=algorithm.options
    ):
        raise JwtVerificationError("Signature verification failed", ErrorCodes.JWT_VERIFICATION_FAILED)

    return decoded
