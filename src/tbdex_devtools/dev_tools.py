"""
DevTools - example tbDEX data for testing purposes
Creates DIDs, offerings, RFQs, credentials and JWTs
"""

import logging
import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .did import DEFAULT_DID_METHOD, DEFAULT_KEY_ALGORITHM, PortableDid, create_did
from .jwt import DecodedJwt, create_jwt, decode_jwt
from .protocol import Offering, Rfq

logger = logging.getLogger(__name__)

PFI_DID = "did:ex:pfi"

CREDENTIALS_CONTEXT = "https://www.w3.org/2018/credentials/v1"


def xml_schema_timestamp(moment: Optional[datetime] = None) -> str:
    """Format a time as an XML Schema 1.1 dateTime without fractional seconds"""
    moment = moment or datetime.now(timezone.utc)
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class DevTools:
    """
    Utility functions for testing purposes
    """

    @staticmethod
    def create_did(did_method: str = DEFAULT_DID_METHOD, key_algorithm: str = DEFAULT_KEY_ALGORITHM) -> PortableDid:
        """
        Create and return a DID

        Args:
            did_method: The type of DID to create (default: 'key')
            key_algorithm: Key algorithm of the DID's signing key (default: 'Ed25519')

        Raises:
            UnsupportedDidMethodError: If the method is not implemented
        """
        return create_did(did_method, key_algorithm)

    @staticmethod
    def create_offering() -> Offering:
        """Create and return an example offering"""
        offering_data = {
            "description": "Selling BTC for USD",
            "payinCurrency": {"currencyCode": "USD"},
            "payoutCurrency": {"currencyCode": "BTC", "maxAmount": "999526.11"},
            "payoutUnitsPerPayinUnit": "0.00003826",
            "payinMethods": [
                {
                    "kind": "DEBIT_CARD",
                    "requiredPaymentDetails": {
                        "$schema": "http://json-schema.org/draft-07/schema",
                        "type": "object",
                        "properties": {
                            "cardNumber": {
                                "type": "string",
                                "description": "The 16-digit debit card number",
                                "minLength": 16,
                                "maxLength": 16,
                            },
                            "expiryDate": {
                                "type": "string",
                                "description": "The expiry date of the card in MM/YY format",
                                "pattern": "^(0[1-9]|1[0-2])\\/([0-9]{2})$",
                            },
                            "cardHolderName": {
                                "type": "string",
                                "description": "Name of the cardholder as it appears on the card",
                            },
                            "cvv": {
                                "type": "string",
                                "description": "The 3-digit CVV code",
                                "minLength": 3,
                                "maxLength": 3,
                            },
                        },
                        "required": ["cardNumber", "expiryDate", "cardHolderName", "cvv"],
                        "additionalProperties": False,
                    },
                }
            ],
            "payoutMethods": [
                {
                    "kind": "BTC_ADDRESS",
                    "requiredPaymentDetails": {
                        "$schema": "http://json-schema.org/draft-07/schema",
                        "type": "object",
                        "properties": {
                            "btcAddress": {"type": "string", "description": "your Bitcoin wallet address"}
                        },
                        "required": ["btcAddress"],
                        "additionalProperties": False,
                    },
                }
            ],
            "requiredClaims": {
                "id": "7ce4004c-3c38-4853-968b-e411bafcd945",
                "format": {"jwt_vc": {"alg": ["ES256K", "EdDSA"]}},
                "input_descriptors": [
                    {
                        "id": "bbdb9b7c-5754-4f46-b63b-590bada959e0",
                        "constraints": {
                            "fields": [
                                {
                                    "path": ["$.vc.type[*]", "$.type[*]"],
                                    "filter": {"type": "string", "pattern": "^SanctionsCredential$"},
                                }
                            ]
                        },
                    }
                ],
            },
        }

        return Offering.create(metadata={"from": PFI_DID}, data=offering_data)

    @staticmethod
    async def create_rfq(sender: PortableDid) -> Rfq:
        """
        Create and return an example RFQ for the offering returned by create_offering

        A credential signed by the sender is generated and attached as the
        RFQ's only claim.

        Args:
            sender: PortableDid of the RFQ sender
        """
        created = await DevTools.create_credential(
            type="YoloCredential", issuer=sender, subject=sender.did, data={"beep": "boop"}
        )

        rfq_data = {
            "offeringId": "abcd123",
            "payinMethod": {
                "kind": "DEBIT_CARD",
                "paymentDetails": {
                    "cardNumber": "1234567890123456",
                    "expiryDate": "12/22",
                    "cardHolderName": "Ephraim Bartholomew Winthrop",
                    "cvv": "123",
                },
            },
            "payoutMethod": {
                "kind": "BTC_ADDRESS",
                "paymentDetails": {"btcAddress": "1A1zP1eP5QGefi2DMPTfTL5SLmv7DivfNa"},
            },
            "payinAmount": "200.00",
            "claims": [created["signed_credential"]],
        }

        rfq = Rfq.create(metadata={"from": sender.did, "to": PFI_DID}, data=rfq_data)
        logger.debug("Created RFQ %s from %s", rfq.id, sender.did)
        return rfq

    @staticmethod
    async def create_credential(
        type: str, issuer: PortableDid, subject: str, data: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        Create a verifiable credential and its signed JWT form

        Args:
            type: The credential type (e.g. UniversityDegreeCredential)
            issuer: PortableDid of the credential issuer
            subject: DID of the credential subject
            data: Data to include in the credential subject

        Returns:
            Dict with 'credential' and 'signed_credential'
        """
        credential = {
            "@context": [CREDENTIALS_CONTEXT],
            "id": str(int(time.time() * 1000)),
            "type": ["VerifiableCredential", type],
            "issuer": issuer.did,
            "issuanceDate": xml_schema_timestamp(),
            "credentialSubject": {"id": subject, **data},
        }

        signed_credential = await create_jwt(
            issuer=issuer, subject=credential["credentialSubject"]["id"], payload={"vc": credential}
        )

        return {"credential": credential, "signed_credential": signed_credential}

    @staticmethod
    async def create_jwt(issuer: PortableDid, subject: str, payload: Any) -> str:
        """
        Create a JWT signed with the issuer's first verification method private key

        Args:
            issuer: The JWT's issuer
            subject: The JWT's subject (e.g. Alice's DID)
            payload: The claims to sign

        Returns:
            A compact JWT
        """
        return await create_jwt(issuer=issuer, subject=subject, payload=payload)

    @staticmethod
    def decode_jwt(compact_jwt: str) -> DecodedJwt:
        """Decode a compact JWT without verifying it"""
        return decode_jwt(compact_jwt)
