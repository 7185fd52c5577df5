"""Lenient transcoding pipeline: file proxy, stream adapters, transcoder, policy and state machine."""

from .controller import LenientController
from .failure_policy import FailurePolicy
from .file_proxy import get_mapped_file, get_original_file, is_mapped_file, new_forwarding_object
from .streams import TransactionalWriteStream, TransformReadStream
from .transcoder import transcode_document

__all__ = [
    "FailurePolicy",
    "LenientController",
    "TransactionalWriteStream",
    "TransformReadStream",
    "get_mapped_file",
    "get_original_file",
    "is_mapped_file",
    "new_forwarding_object",
    "transcode_document",
]
