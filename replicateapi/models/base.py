"""
Data structures for Replicate API resources.

This module provides:
- PredictionStatus: The five states a prediction can report
- Prediction: One asynchronous prediction job, as last seen on the server
- ModelVersion: A published version of a model with its OpenAPI schema
- ModelVersionPage: The paginated envelope returned by the versions endpoint
"""

from dataclasses import dataclass, field, fields
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from replicateapi.config import (
    STATUS_STARTING,
    STATUS_PROCESSING,
    STATUS_SUCCEEDED,
    STATUS_FAILED,
    STATUS_CANCELED,
    TERMINAL_STATUSES,
)
from replicateapi.models.errors import DecodingError
from replicateapi.utils.json_parser import JSONValue, parse_timestamp

if TYPE_CHECKING:
    from replicateapi.models.client import Client


class PredictionStatus(str, Enum):
    """
    Status reported by the API for a prediction.

    starting and processing are transient; the remaining three are final.
    Transitions happen on the server only.
    """
    # The prediction is starting up. If this lasts longer than a few seconds,
    # a new worker is typically being booted to run it.
    STARTING = STATUS_STARTING
    # The model's predict() method is running.
    PROCESSING = STATUS_PROCESSING
    SUCCEEDED = STATUS_SUCCEEDED
    FAILED = STATUS_FAILED
    # Canceled by the user.
    CANCELED = STATUS_CANCELED

    @property
    def is_terminal(self) -> bool:
        """Whether the prediction has stopped and will not change again."""
        return self.value in TERMINAL_STATUSES

    def __str__(self) -> str:
        return self.value


def _require(payload: Dict[str, Any], key: str) -> Any:
    if key not in payload:
        raise DecodingError(f"decoding the response: missing field '{key}'")
    return payload[key]


def _mapping(payload: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = payload.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise DecodingError(f"decoding the response: '{key}' must be an object")
    return value


@dataclass
class Prediction:
    """
    A single prediction as last reported by the API.

    Attributes:
        id: Server-assigned prediction identifier
        version: Model version the prediction runs against
        status: Current status
        created_at: When the prediction was created
        started_at: When the model started running, if it has
        completed_at: When the prediction reached a final state, if it has
        input: Input mapping sent on creation
        output: Model output; its shape is defined by the model
        error: Error detail, present only when the prediction failed
        logs: Log output of the model
        metrics: Runtime metrics such as predict_time
        get_url: API URL for fetching this prediction
        cancel_url: API URL for canceling this prediction
    """
    id: str
    version: str
    status: PredictionStatus
    created_at: datetime
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    input: Dict[str, Any] = field(default_factory=dict)
    output: JSONValue = None
    error: JSONValue = None
    logs: JSONValue = None
    metrics: Dict[str, Any] = field(default_factory=dict)
    get_url: Optional[str] = None
    cancel_url: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: Any) -> "Prediction":
        """
        Build a Prediction from a decoded API response.

        Raises:
            DecodingError: If required fields are missing, the status is not
                one of the known values, or a timestamp is malformed
        """
        if not isinstance(payload, dict):
            raise DecodingError("decoding the response: expected a prediction object")

        raw_status = _require(payload, 'status')
        try:
            status = PredictionStatus(raw_status)
        except ValueError as e:
            raise DecodingError(f"decoding the response: unknown status {raw_status!r}") from e

        urls = _mapping(payload, 'urls')

        return cls(
            id=str(_require(payload, 'id')),
            version=str(payload.get('version') or ''),
            status=status,
            created_at=parse_timestamp(_require(payload, 'created_at'), 'created_at'),
            started_at=parse_timestamp(payload.get('started_at'), 'started_at'),
            completed_at=parse_timestamp(payload.get('completed_at'), 'completed_at'),
            input=_mapping(payload, 'input'),
            output=payload.get('output'),
            error=payload.get('error'),
            logs=payload.get('logs'),
            metrics=_mapping(payload, 'metrics'),
            get_url=urls.get('get'),
            cancel_url=urls.get('cancel'),
        )

    @property
    def is_terminal(self) -> bool:
        """Whether the prediction succeeded, failed or was canceled."""
        return self.status.is_terminal

    def replace_with(self, other: "Prediction") -> None:
        """Overwrite every field of this prediction with the other's values."""
        for f in fields(self):
            setattr(self, f.name, getattr(other, f.name))

    def refresh(self, client: "Client") -> None:
        """Fetch the current server state of this prediction in place."""
        client.refresh(self)


@dataclass
class ModelVersion:
    """
    A single version of a model with its schema.

    Attributes:
        id: Version identifier, passed as `version` when creating predictions
        created_at: When the version was pushed
        cog_version: Version of the runtime the model was built with
        openapi_schema: OpenAPI description of the accepted input and output
    """
    id: str
    created_at: datetime
    cog_version: str = ''
    openapi_schema: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, payload: Any) -> "ModelVersion":
        """Build a ModelVersion from a decoded API response."""
        if not isinstance(payload, dict):
            raise DecodingError("decoding the response: expected a model version object")

        return cls(
            id=str(_require(payload, 'id')),
            created_at=parse_timestamp(_require(payload, 'created_at'), 'created_at'),
            cog_version=payload.get('cog_version') or '',
            openapi_schema=_mapping(payload, 'openapi_schema'),
        )


@dataclass
class ModelVersionPage:
    """
    One page of model versions.

    The previous/next cursors are passed through as returned; the client
    never follows them.
    """
    results: List[ModelVersion]
    previous: Optional[str] = None
    next: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: Any) -> "ModelVersionPage":
        """Build a page from the decoded envelope, newest version first."""
        if not isinstance(payload, dict):
            raise DecodingError("decoding the response: expected a paginated object")

        results = payload.get('results') or []
        if not isinstance(results, list):
            raise DecodingError("decoding the response: 'results' must be an array")

        versions = [ModelVersion.from_dict(item) for item in results]
        versions.sort(key=lambda v: v.created_at, reverse=True)

        return cls(
            results=versions,
            previous=payload.get('previous'),
            next=payload.get('next'),
        )
