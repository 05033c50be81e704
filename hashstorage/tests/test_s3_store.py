"""
Tests for S3LocalStore using moto (S3 mock).
"""

import boto3
import pytest
from moto import mock_aws

from hashstorage.core.errors import LocalStoreError
from hashstorage.storage.s3_store import S3LocalStore

BUCKET = "test-bucket"


@mock_aws
def test_s3_store_roundtrip():
    boto3.client("s3", region_name="us-east-1").create_bucket(Bucket=BUCKET)
    store = S3LocalStore(bucket=BUCKET, prefix="profiles/alex")

    assert store.get("hsPublicKey") is None

    store.set("hsPublicKey", "ABCD")
    assert store.get("hsPublicKey") == "ABCD"
    assert "hsPublicKey" in store

    store.remove("hsPublicKey")
    assert store.get("hsPublicKey") is None


@mock_aws
def test_s3_store_object_layout():
    s3_client = boto3.client("s3", region_name="us-east-1")
    s3_client.create_bucket(Bucket=BUCKET)
    store = S3LocalStore(bucket=BUCKET, prefix="profiles/alex/")

    store.set("hslsvc-42", "7")

    obj = s3_client.get_object(Bucket=BUCKET, Key="profiles/alex/hslsvc-42")
    assert obj["Body"].read() == b"7"


@mock_aws
def test_s3_store_missing_bucket_raises():
    store = S3LocalStore(bucket="no-such-bucket")

    with pytest.raises(LocalStoreError):
        store.get("k")
    with pytest.raises(LocalStoreError):
        store.set("k", "v")
