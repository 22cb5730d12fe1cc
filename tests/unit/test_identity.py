# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

from datetime import UTC, datetime, timedelta

import pytest
from aws_ses_request import AWSCredentialIdentity


@pytest.mark.parametrize(
    "access_key_id,secret_access_key,expiration",
    [
        ("AKID1234EXAMPLE", "SECRET1234", None),
        ("AKID1234EXAMPLE", "SECRET1234", datetime(2024, 5, 1, tzinfo=UTC)),
    ],
)
def test_aws_credential_identity(
    access_key_id: str,
    secret_access_key: str,
    expiration: datetime | None,
) -> None:
    creds = AWSCredentialIdentity(
        access_key_id=access_key_id,
        secret_access_key=secret_access_key,
        expiration=expiration,
    )
    assert creds.access_key_id == access_key_id
    assert creds.secret_access_key == secret_access_key
    assert creds.expiration == expiration
    assert secret_access_key not in repr(creds)


@pytest.mark.parametrize(
    "expiration,is_expired",
    [
        (None, False),
        (datetime(2024, 5, 1, tzinfo=UTC), True),
        (datetime.now(UTC) + timedelta(hours=1), False),
    ],
)
def test_aws_credential_identity_expired(
    expiration: datetime | None, is_expired: bool
) -> None:
    creds = AWSCredentialIdentity(
        access_key_id="AKID1234EXAMPLE",
        secret_access_key="SECRET1234",
        expiration=expiration,
    )
    assert creds.is_expired is is_expired
