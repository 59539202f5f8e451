# SPDX-License-Identifier: MIT
"""Unit tests for connection descriptors and the backend selector."""

import pytest

from omnistore.descriptors import (
    Backend,
    BlobDescriptor,
    ConnectionOptions,
    ObjectStoreDescriptor,
    is_object_store_connection_string,
    parse_connection_string,
    parse_key_value_pairs,
)

AZURE_CONNECTION_STRING = "DefaultEndpointsProtocol=https;AccountName=devstore;AccountKey=a2V5"

# ------------------------------------------------------------------
# Backend selector
# ------------------------------------------------------------------


@pytest.mark.unit
class TestBackendSelector:
    def test_azure_string_selects_azure(self):
        assert Backend.from_selector("azure") is Backend.AZURE

    def test_enum_member_accepted(self):
        assert Backend.from_selector(Backend.AZURE) is Backend.AZURE
        assert Backend.from_selector(Backend.S3) is Backend.S3

    @pytest.mark.parametrize("value", ["s3", "S3", "Azure", "gcs", ""])
    def test_everything_else_selects_s3(self, value):
        assert Backend.from_selector(value) is Backend.S3


# ------------------------------------------------------------------
# Sniffing
# ------------------------------------------------------------------


@pytest.mark.unit
class TestSniffing:
    def test_all_markers_required(self):
        assert is_object_store_connection_string("accessKeyId=a;secretAccessKey=b;region=c")
        assert not is_object_store_connection_string("accessKeyId=a;secretAccessKey=b")
        assert not is_object_store_connection_string(AZURE_CONNECTION_STRING)

    def test_marker_order_irrelevant(self):
        assert is_object_store_connection_string("region=c;secretAccessKey=b;accessKeyId=a")

    def test_markers_are_case_sensitive(self):
        assert not is_object_store_connection_string("accesskeyid=a;secretaccesskey=b;region=c")


# ------------------------------------------------------------------
# parse_connection_string
# ------------------------------------------------------------------


@pytest.mark.unit
class TestParseConnectionString:
    def test_merges_over_base_configuration(self):
        descriptor = parse_connection_string(
            "accessKeyId=AKIA;secretAccessKey=SECRET;region=us-east-1",
            ConnectionOptions(client_configuration={"maxRetries": 3}),
        )

        assert isinstance(descriptor, ObjectStoreDescriptor)
        assert descriptor.config == {
            "maxRetries": 3,
            "accessKeyId": "AKIA",
            "secretAccessKey": "SECRET",
            "region": "us-east-1",
        }

    def test_parsed_pairs_override_base_values(self):
        descriptor = parse_connection_string(
            "accessKeyId=AKIA;secretAccessKey=SECRET;region=eu-west-1",
            ConnectionOptions(client_configuration={"region": "us-east-1"}),
        )
        assert descriptor.config["region"] == "eu-west-1"

    def test_whitespace_trimmed(self):
        descriptor = parse_connection_string("  accessKeyId=AKIA ;  secretAccessKey=SECRET; region=us-east-1  ")
        assert descriptor.config == {"accessKeyId": "AKIA", "secretAccessKey": "SECRET", "region": "us-east-1"}

    def test_azure_string_passed_verbatim(self):
        descriptor = parse_connection_string(
            AZURE_CONNECTION_STRING,
            ConnectionOptions(storage_pipeline_options={"retry_total": 2}, client_configuration={"maxRetries": 3}),
        )

        assert isinstance(descriptor, BlobDescriptor)
        assert descriptor.connection_string == AZURE_CONNECTION_STRING
        assert descriptor.pipeline_options == {"retry_total": 2}

    def test_no_options(self):
        descriptor = parse_connection_string(AZURE_CONNECTION_STRING)
        assert descriptor.pipeline_options == {}


@pytest.mark.unit
class TestMalformedPairs:
    """Malformed input is accepted and yields None values instead of raising."""

    def test_segment_without_equals(self):
        assert parse_key_value_pairs("region") == {"region": None}

    def test_trailing_separator(self):
        pairs = parse_key_value_pairs("accessKeyId=a;secretAccessKey=b;region=c;")
        assert pairs[""] is None
        assert pairs["region"] == "c"

    def test_extra_equals_dropped(self):
        assert parse_key_value_pairs("secretAccessKey=abc=def") == {"secretAccessKey": "abc"}

    def test_malformed_object_store_string_still_parses(self):
        descriptor = parse_connection_string("accessKeyId;secretAccessKey=S;region=r")
        assert descriptor.config["accessKeyId"] is None

    def test_non_integer_max_retries_dropped(self, caplog):
        descriptor = parse_connection_string("accessKeyId=A;secretAccessKey=S;region=us-east-1;maxRetries=three")

        with caplog.at_level("WARNING", logger="omnistore"):
            kwargs = descriptor.client_kwargs()

        assert kwargs == {"aws_access_key_id": "A", "aws_secret_access_key": "S", "region_name": "us-east-1"}
        assert "maxRetries" in caplog.text


# ------------------------------------------------------------------
# ObjectStoreDescriptor.client_kwargs
# ------------------------------------------------------------------


@pytest.mark.unit
class TestClientKwargs:
    def test_credential_aliases(self):
        kwargs = ObjectStoreDescriptor(
            config={"accessKeyId": "AKIA", "secretAccessKey": "SECRET", "region": "us-east-1"}
        ).client_kwargs()

        assert kwargs == {
            "aws_access_key_id": "AKIA",
            "aws_secret_access_key": "SECRET",
            "region_name": "us-east-1",
        }

    def test_max_retries_becomes_botocore_config(self):
        kwargs = ObjectStoreDescriptor(config={"maxRetries": "5"}).client_kwargs()
        assert kwargs["config"].retries == {"max_attempts": 5}

    def test_force_path_style(self):
        kwargs = ObjectStoreDescriptor(config={"s3ForcePathStyle": "true", "maxRetries": 2}).client_kwargs()
        assert kwargs["config"].s3 == {"addressing_style": "path"}
        assert kwargs["config"].retries == {"max_attempts": 2}

    def test_force_path_style_false_ignored(self):
        assert ObjectStoreDescriptor(config={"s3ForcePathStyle": "false"}).client_kwargs() == {}

    def test_ssl_enabled_string(self):
        assert ObjectStoreDescriptor(config={"sslEnabled": "false"}).client_kwargs() == {"use_ssl": False}

    def test_boto3_names_pass_through(self):
        kwargs = ObjectStoreDescriptor(
            config={"endpoint_url": "http://localhost:9000", "region_name": "us-east-1"}
        ).client_kwargs()
        assert kwargs == {"endpoint_url": "http://localhost:9000", "region_name": "us-east-1"}

    def test_none_values_skipped(self):
        assert ObjectStoreDescriptor(config={"region": None, "": None}).client_kwargs() == {}

    def test_unknown_keys_dropped_with_warning(self, caplog):
        with caplog.at_level("WARNING", logger="omnistore"):
            kwargs = ObjectStoreDescriptor(config={"bogus": "x", "region": "r"}).client_kwargs()

        assert kwargs == {"region_name": "r"}
        assert "bogus" in caplog.text
