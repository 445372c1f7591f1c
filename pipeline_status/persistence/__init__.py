"""
Status document persistence.

A ``Store`` reads and writes raw bytes under a key; the codec turns those
bytes into ``PipelineStatus`` values and back.
"""

from .codec import decode_status, encode_status
from .s3_store import S3Store, create_s3_client
from .store import Store, WriteOptions

__all__ = [
    "Store",
    "WriteOptions",
    "S3Store",
    "create_s3_client",
    "decode_status",
    "encode_status",
]
