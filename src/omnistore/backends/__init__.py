# SPDX-License-Identifier: MIT
"""Per-backend operations.

- azure: Azure Blob Storage (async SDK)
- s3: Amazon S3 via boto3, run in a worker thread
"""
