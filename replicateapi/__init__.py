"""
Replicate API client.

Synchronous client for creating predictions on replicate.com, polling them
to completion and listing model versions.

    from replicateapi import Client

    client = Client(token, "owner/model", version)
    prediction = client.create_prediction({"prompt": "..."})
"""

__version__ = '1.0.0'

from replicateapi.models.base import (
    ModelVersion,
    ModelVersionPage,
    Prediction,
    PredictionStatus,
)
from replicateapi.models.client import Client, parse_model_identifier
from replicateapi.models.errors import (
    DecodingError,
    EncodingError,
    InvalidModelIdentifierError,
    RateLimitError,
    ReplicateError,
    ServerError,
    TransportError,
    UnauthorizedError,
    check_status,
)
from replicateapi.utils.encoding import encode_file, encode_image
from replicateapi.utils.json_parser import JSONValue, json_kind

__all__ = [
    # Client
    'Client',
    'parse_model_identifier',
    # Resources
    'Prediction',
    'PredictionStatus',
    'ModelVersion',
    'ModelVersionPage',
    # Errors
    'ReplicateError',
    'InvalidModelIdentifierError',
    'TransportError',
    'UnauthorizedError',
    'RateLimitError',
    'ServerError',
    'DecodingError',
    'EncodingError',
    'check_status',
    # Helpers
    'encode_image',
    'encode_file',
    'JSONValue',
    'json_kind',
]
