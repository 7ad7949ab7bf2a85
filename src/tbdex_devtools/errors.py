"""
tbDEX DevTools Error Classes
Provides specific error types with error codes for better error handling
"""


class DevToolsError(Exception):
    """Base DevTools Error"""

    def __init__(self, message: str, code: str = "DEVTOOLS_UNKNOWN_ERROR"):
        super().__init__(message)
        self.message = message
        self.code = code


class NoSigningKeyError(DevToolsError):
    """Identity has no usable signing key"""

    def __init__(self, message: str, code: str = "DEVTOOLS_NO_SIGNING_KEY"):
        super().__init__(message, code)


class MalformedKeyError(DevToolsError):
    """Key entry is missing its algorithm/curve tags or private material"""

    def __init__(self, message: str, code: str = "DEVTOOLS_MALFORMED_KEY"):
        super().__init__(message, code)


class UnsupportedAlgorithmError(DevToolsError):
    """No signer registered for an algorithm composite id"""

    def __init__(self, algorithm_id: str, code: str = "DEVTOOLS_UNSUPPORTED_ALGORITHM"):
        super().__init__(f"Unsupported algorithm: {algorithm_id}", code)
        self.algorithm_id = algorithm_id


class MalformedTokenError(DevToolsError):
    """Compact JWT could not be split or decoded"""

    def __init__(self, message: str, code: str = "DEVTOOLS_MALFORMED_TOKEN"):
        super().__init__(message, code)


class JwtSigningError(DevToolsError):
    """Signer failed while producing a JWT signature"""

    def __init__(self, message: str, code: str = "DEVTOOLS_JWT_SIGNING_FAILED"):
        super().__init__(message, code)


class JwtVerificationError(DevToolsError):
    """JWT signature or algorithm did not match the verification key"""

    def __init__(self, message: str, code: str = "DEVTOOLS_JWT_VERIFICATION_FAILED"):
        super().__init__(message, code)


class UnsupportedDidMethodError(DevToolsError):
    """Requested DID method cannot be created"""

    def __init__(self, message: str, code: str = "DEVTOOLS_UNSUPPORTED_DID_METHOD"):
        super().__init__(message, code)


class ErrorCodes:
    """
    Error Codes Enum

    Use these codes to handle specific error types in your application:

    Example:
        try:
            token = await create_jwt(issuer=did, subject=subject, payload={})
        except DevToolsError as error:
            if error.code == ErrorCodes.UNSUPPORTED_ALGORITHM:
                print('Issuer key uses an algorithm with no registered signer')
    """

    # Key Errors
    NO_SIGNING_KEY = "DEVTOOLS_NO_SIGNING_KEY"
    MALFORMED_KEY = "DEVTOOLS_MALFORMED_KEY"
    UNSUPPORTED_ALGORITHM = "DEVTOOLS_UNSUPPORTED_ALGORITHM"
    UNSUPPORTED_KEY_ALGORITHM = "DEVTOOLS_UNSUPPORTED_KEY_ALGORITHM"

    # Token Errors
    MALFORMED_TOKEN = "DEVTOOLS_MALFORMED_TOKEN"
    JWT_SIGNING_FAILED = "DEVTOOLS_JWT_SIGNING_FAILED"
    JWT_VERIFICATION_FAILED = "DEVTOOLS_JWT_VERIFICATION_FAILED"
    JWT_ALGORITHM_MISMATCH = "DEVTOOLS_JWT_ALGORITHM_MISMATCH"

    # DID Errors
    UNSUPPORTED_DID_METHOD = "DEVTOOLS_UNSUPPORTED_DID_METHOD"
