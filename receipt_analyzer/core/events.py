"""
Validation of S3 notification events.
"""

from .errors import InvalidEventError
from .models import S3Location
from .utils import decode_s3_key


def parse_s3_event(event) -> S3Location:
    """
    Pull the uploaded object's location out of an S3 ``ObjectCreated`` event.

    Only the first record is used; one upload triggers one invocation.

    Raises:
        InvalidEventError: if the event has no S3 record with a bucket and key
    """
    try:
        record = event["Records"][0]["s3"]
        bucket = record["bucket"]["name"]
        raw_key = record["object"]["key"]
    except (KeyError, IndexError, TypeError) as e:
        raise InvalidEventError(f"Not an S3 object event: missing {e}") from e

    if not bucket or not raw_key:
        raise InvalidEventError("S3 event has an empty bucket name or object key")

    return S3Location(bucket=bucket, key=decode_s3_key(raw_key))


def parse_s3_uri(value: str) -> S3Location:
    """Parse ``bucket/key`` or ``s3://bucket/key`` as given on the command line."""
    if value.startswith("s3://"):
        value = value[len("s3://"):]
    bucket, sep, key = value.partition("/")
    if not bucket or not sep or not key:
        raise InvalidEventError(f"Expected BUCKET/KEY, got: {value!r}")
    return S3Location(bucket=bucket, key=key)
