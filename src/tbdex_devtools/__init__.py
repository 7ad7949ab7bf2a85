"""
tbDEX DevTools for Python

Compact JWT signing with the algorithm selected from the signer's key,
plus example DIDs, offerings, RFQs and credentials for testing
"""

from .crypto import (
    ALGORITHM_REGISTRY,
    AlgorithmDescriptor,
    Ed25519Signer,
    JoseEcdsaSigner,
    Secp256k1Signer,
    Signer,
    algorithm_id_for,
    resolve_algorithm,
)

# Primary exports - recommended usage
from .dev_tools import DevTools
from .did import KeySet, PortableDid, VerificationMethodKey, create_did, create_did_key

# Encoding exports
from .encoding import decode_to_bytes, decode_to_object, encode_bytes, encode_object

# Error exports for better error handling
from .errors import (
    DevToolsError,
    ErrorCodes,
    JwtSigningError,
    JwtVerificationError,
    MalformedKeyError,
    MalformedTokenError,
    NoSigningKeyError,
    UnsupportedAlgorithmError,
    UnsupportedDidMethodError,
)
from .jwt import DecodedJwt, create_jwt, decode_jwt, merge_claims, verify_jwt
from .keys import ResolvedKey, SigningKey, generate_private_jwk, primary_signing_key, public_jwk
from .protocol import Offering, Rfq

# Version exports
from .version import SDK_VERSION

__version__ = SDK_VERSION
__all__ = [
    # Primary classes
    "DevTools",
    "PortableDid",
    "KeySet",
    "VerificationMethodKey",
    "Offering",
    "Rfq",
    # Token functions
    "create_jwt",
    "decode_jwt",
    "verify_jwt",
    "merge_claims",
    "DecodedJwt",
    # Algorithm registry
    "ALGORITHM_REGISTRY",
    "AlgorithmDescriptor",
    "Signer",
    "Secp256k1Signer",
    "Ed25519Signer",
    "JoseEcdsaSigner",
    "algorithm_id_for",
    "resolve_algorithm",
    # Keys
    "SigningKey",
    "ResolvedKey",
    "primary_signing_key",
    "generate_private_jwk",
    "public_jwk",
    # DIDs
    "create_did",
    "create_did_key",
    # Encoding
    "encode_object",
    "encode_bytes",
    "decode_to_bytes",
    "decode_to_object",
    # Error classes
    "DevToolsError",
    "NoSigningKeyError",
    "MalformedKeyError",
    "UnsupportedAlgorithmError",
    "MalformedTokenError",
    "JwtSigningError",
    "JwtVerificationError",
    "UnsupportedDidMethodError",
    "ErrorCodes",
    # Version constants
    "SDK_VERSION",
]
