# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import datetime
import hmac
import logging
from dataclasses import dataclass, field
from hashlib import sha256
from urllib.parse import quote

from ._http import URI, Field, Fields, HTTPRequest
from ._identity import AWSCredentialIdentity
from .exceptions import UnsupportedMethodException
from .interfaces.identity import AWSCredentialsIdentity as _AWSCredentialsIdentity
from .parameters import RequestParameters

logger = logging.getLogger(__name__)

ALGORITHM: str = "AWS4-HMAC-SHA256"
SERVICE_NAME: str = "email"
SCOPE_TERMINATOR: str = "aws4_request"

SIGV4_TIMESTAMP_FORMAT: str = "%Y%m%dT%H%M%SZ"
SIGV4_DATE_FORMAT: str = "%Y%m%d"

FORM_CONTENT_TYPE: str = "application/x-www-form-urlencoded"
CANONICAL_URI: str = "/"

# Actions whose parameters are submitted as a form body and whose content type
# is therefore covered by the signature.
CONTENT_BEARING_ACTIONS: frozenset[str] = frozenset({"SendEmail", "SendRawEmail"})

# Methods that carry the encoded parameters on the URL instead of in the body.
QUERY_STRING_METHODS: frozenset[str] = frozenset({"GET", "DELETE"})
SUPPORTED_METHODS: frozenset[str] = QUERY_STRING_METHODS | {"POST"}


@dataclass(kw_only=True, frozen=True)
class SigningContext:
    """Everything that scopes a single signature besides the request itself."""

    date: str
    """Signing date as ``YYYYMMDD``."""

    timestamp: str
    """Signing time as ``YYYYMMDDTHHMMSSZ``."""

    region: str
    secret_key: str = field(repr=False)
    service: str = SERVICE_NAME

    @classmethod
    def create(
        cls,
        *,
        region: str,
        secret_key: str,
        now: datetime.datetime | None = None,
        service: str = SERVICE_NAME,
    ) -> "SigningContext":
        """Build a context for ``now``, defaulting to the current UTC time.

        Naive datetimes are assumed to be UTC already.
        """
        if now is None:
            now = datetime.datetime.now(datetime.UTC)
        elif now.tzinfo is not None:
            now = now.astimezone(datetime.UTC)
        return cls(
            date=now.strftime(SIGV4_DATE_FORMAT),
            timestamp=now.strftime(SIGV4_TIMESTAMP_FORMAT),
            region=region,
            secret_key=secret_key,
            service=service,
        )


class SESSigV4Signer:
    """Request signer applying the AWS Signature Version 4 algorithm to SES Query
    API requests."""

    def sign(
        self,
        *,
        method: str,
        parameters: RequestParameters,
        identity: AWSCredentialIdentity,
        region: str,
        host: str,
        date: datetime.datetime | None = None,
        user_agent: str | None = None,
    ) -> HTTPRequest:
        """Build a signed request for the supplied parameters.

        :param method: ``GET``, ``POST`` or ``DELETE``.
        :param parameters: The Query API parameters, including ``Action``.
        :param identity: Credentials whose access key is named in the
            ``Authorization`` header and whose secret derives the signing key.
        :param region: The AWS region the request is scoped to.
        :param host: The SES endpoint host, also used for the ``Host`` header.
        :param date: Signing time. Defaults to the current UTC time.
        :param user_agent: Optional ``User-Agent`` value. It is not signed.
        """
        method = method.upper()
        if method not in SUPPORTED_METHODS:
            raise UnsupportedMethodException(
                f"Unsupported HTTP method {method!r}. Expected one of "
                f"{', '.join(sorted(SUPPORTED_METHODS))}."
            )
        self._validate_identity(identity=identity)
        context = SigningContext.create(
            region=region, secret_key=identity.secret_access_key, now=date
        )

        canonical_request = self.canonical_request(
            method=method, parameters=parameters, context=context, host=host
        )
        logger.debug("Canonical request:\n%s", canonical_request)
        string_to_sign = self.string_to_sign(
            canonical_request=canonical_request, context=context
        )
        logger.debug("String to sign:\n%s", string_to_sign)
        signature = self.signature(string_to_sign=string_to_sign, context=context)

        signing_fields = self._signing_fields(
            parameters=parameters, context=context, host=host
        )
        fields = Fields(
            Field(name=name.title(), values=[value])
            for name, value in signing_fields.items()
        )
        credential_scope = self.credential_scope(context)
        fields.set_field(
            self.generate_authorization_field(
                credential=f"{identity.access_key_id}/{credential_scope}",
                signed_headers=list(signing_fields),
                signature=signature,
            )
        )

        query = self.canonical_query(parameters)
        if method in QUERY_STRING_METHODS:
            destination = URI(host=host, path=CANONICAL_URI, query=query)
            body = None
        else:
            destination = URI(host=host, path=CANONICAL_URI)
            body = query.encode("utf-8")
            if "Content-Type" not in fields:
                fields.set_field(
                    Field(name="Content-Type", values=[FORM_CONTENT_TYPE])
                )
        if user_agent is not None:
            fields.set_field(Field(name="User-Agent", values=[user_agent]))

        return HTTPRequest(
            method=method, destination=destination, fields=fields, body=body
        )

    def generate_authorization_field(
        self, *, credential: str, signed_headers: list[str], signature: str
    ) -> Field:
        """Generate the `Authorization` field.

        :param credential:
            Credential scope string for generating the Authorization header.
            Defined as:
                <access_key>/<date>/<region>/<service>/aws4_request
        :param signed_headers:
            A list of the field names used in signing.
        :param signature:
            Final hash of the SigV4 signing algorithm generated from the
            canonical request and string to sign.
        """
        signed_headers_str = ";".join(signed_headers)
        auth_str = (
            f"{ALGORITHM} Credential={credential}, "
            f"SignedHeaders={signed_headers_str}, Signature={signature}"
        )
        return Field(name="Authorization", values=[auth_str])

    def canonical_request(
        self,
        *,
        method: str,
        parameters: RequestParameters,
        context: SigningContext,
        host: str,
    ) -> str:
        """The canonical request is a standardized string laying out the components used
        in the SigV4 signing algorithm. This is useful to quickly compare inputs to find
        signature mismatches and unintended variances.

        The SigV4 specification defines the canonical request to be:
            <HTTPMethod>\n
            <CanonicalURI>\n
            <CanonicalQueryString>\n
            <CanonicalHeaders>\n
            <SignedHeaders>\n
            <HashedPayload>

        The payload hash always covers the encoded parameters, whether they travel
        in the body or on the URL. The canonical query string is only populated
        when they travel on the URL.
        """
        method = method.upper()
        query = self.canonical_query(parameters)
        signing_fields = self._signing_fields(
            parameters=parameters, context=context, host=host
        )
        canonical_query = query if method in QUERY_STRING_METHODS else ""
        return (
            f"{method}\n"
            f"{CANONICAL_URI}\n"
            f"{canonical_query}\n"
            f"{self.canonical_headers(signing_fields)}\n"
            f"{self.signed_headers(signing_fields)}\n"
            f"{self.payload_hash(query)}"
        )

    def canonical_query(self, parameters: RequestParameters) -> str:
        """Percent-encode the parameters as an RFC 3986 query string sorted by
        encoded name."""
        encoded = (
            (_uri_encode(key), _uri_encode(value))
            for key, value in parameters.flattened()
        )
        # sorted() is stable, so values sharing a name keep their relative order.
        return "&".join(
            f"{key}={value}" for key, value in sorted(encoded, key=lambda kv: kv[0])
        )

    def canonical_headers(self, signing_fields: dict[str, str]) -> str:
        return "".join(f"{name}:{value}\n" for name, value in signing_fields.items())

    def signed_headers(self, signing_fields: dict[str, str]) -> str:
        return ";".join(signing_fields)

    def payload_hash(self, query: str) -> str:
        return sha256(query.encode("utf-8")).hexdigest()

    def is_content_bearing(self, parameters: RequestParameters) -> bool:
        return parameters.action in CONTENT_BEARING_ACTIONS

    def string_to_sign(
        self,
        *,
        canonical_request: str,
        context: SigningContext,
    ) -> str:
        """The string to sign concatenates the formal identifier of the signing
        algorithm, the signing timestamp, the scope of the credentials, and a hash of
        the canonical request.

        The SigV4 specification defines the string to sign as:
            Algorithm \n
            RequestDateTime \n
            CredentialScope  \n
            HashedCanonicalRequest
        """
        return (
            f"{ALGORITHM}\n"
            f"{context.timestamp}\n"
            f"{self.credential_scope(context)}\n"
            f"{sha256(canonical_request.encode('utf-8')).hexdigest()}"
        )

    def credential_scope(self, context: SigningContext) -> str:
        # Scope format: <YYYYMMDD>/<AWS Region>/<AWS Service>/aws4_request
        return f"{context.date}/{context.region}/{context.service}/{SCOPE_TERMINATOR}"

    def signing_key(self, context: SigningContext) -> bytes:
        """Derive the key scoped to the context's date, region and service.

        DateKey              = HMAC-SHA256("AWS4"+"<SecretAccessKey>", "<YYYYMMDD>")
        DateRegionKey        = HMAC-SHA256(<DateKey>, "<aws-region>")
        DateRegionServiceKey = HMAC-SHA256(<DateRegionKey>, "<aws-service>")
        SigningKey           = HMAC-SHA256(<DateRegionServiceKey>, "aws4_request")
        """
        k_date = self._hash(
            key=f"AWS4{context.secret_key}".encode(), value=context.date
        )
        k_region = self._hash(key=k_date, value=context.region)
        k_service = self._hash(key=k_region, value=context.service)
        return self._hash(key=k_service, value=SCOPE_TERMINATOR)

    def signature(self, *, string_to_sign: str, context: SigningContext) -> str:
        """Sign the string to sign with a freshly derived signing key."""
        return self._hash(key=self.signing_key(context), value=string_to_sign).hex()

    def _hash(self, key: bytes, value: str) -> bytes:
        return hmac.new(key=key, msg=value.encode(), digestmod=sha256).digest()

    def _signing_fields(
        self, *, parameters: RequestParameters, context: SigningContext, host: str
    ) -> dict[str, str]:
        # Insertion order is the canonical order: content-type, host, x-amz-date.
        signing_fields: dict[str, str] = {}
        if self.is_content_bearing(parameters):
            signing_fields["content-type"] = FORM_CONTENT_TYPE
        signing_fields["host"] = host
        signing_fields["x-amz-date"] = context.timestamp
        return signing_fields

    def _validate_identity(self, *, identity: AWSCredentialIdentity) -> None:
        """Perform runtime and expiration checks before attempting signing."""
        if not isinstance(identity, _AWSCredentialsIdentity):  # pyright: ignore
            raise ValueError(
                "Received unexpected value for identity parameter. Expected "
                f"AWSCredentialIdentity but received {type(identity)}."
            )
        elif identity.is_expired:
            raise ValueError(
                f"Provided identity expired at {identity.expiration}. Please "
                "refresh the credentials or update the expiration parameter."
            )


def _uri_encode(value: str) -> str:
    # quote() leaves only the RFC 3986 unreserved set unescaped when safe is empty.
    return quote(string=value, safe="")
