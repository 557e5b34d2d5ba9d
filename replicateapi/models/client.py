"""
Client for the Replicate HTTP API.

Each method performs exactly one blocking HTTP round trip. The client keeps
no state between calls besides its configuration and never retries, polls
or sleeps; callers own the polling loop and any retry policy.

Example:
    client = Client(token, "stability-ai/sdxl", version_id)
    prediction = client.create_prediction({"prompt": "an astronaut riding a horse"})
    while not prediction.is_terminal:
        time.sleep(1)
        client.refresh(prediction)
    print(prediction.output)
"""

import os
from typing import Any, Dict, List, Optional, Tuple

import requests

from replicateapi.config import (
    API_BASE_URL,
    API_VERSION,
    AUTH_SCHEME,
    CONTENT_TYPE_JSON,
    DEFAULT_TIMEOUT,
    ENV_API_TOKEN,
    ENV_BASE_URL,
    MODEL_VERSIONS_PATH,
    PREDICTION_PATH,
    PREDICTIONS_PATH,
)
from replicateapi.models.base import ModelVersion, ModelVersionPage, Prediction
from replicateapi.models.errors import (
    InvalidModelIdentifierError,
    TransportError,
    UnauthorizedError,
    check_status,
)
from replicateapi.utils.json_parser import decode_json_body, encode_json_body
from replicateapi.utils.logger import get_logger

logger = get_logger(__name__)


def parse_model_identifier(model: str) -> Tuple[str, str]:
    """
    Split an "owner/model" identifier.

    Raises:
        InvalidModelIdentifierError: Unless the identifier has exactly two
            non-empty parts
    """
    splits = model.split('/') if isinstance(model, str) else []
    if len(splits) != 2 or not all(splits):
        raise InvalidModelIdentifierError(
            f"format of the model name must be owner/modelname, got {model!r}"
        )
    return splits[0], splits[1]


class Client:
    """
    API client bound to one model version.

    Attributes:
        authorization_token: API token sent with every request
        owner: Model owner, parsed from the model identifier
        model: Model name, parsed from the model identifier
        version: Model version used for new predictions
        base_url: API host, e.g. https://api.replicate.com
        api_version: API version path segment, e.g. v1
        timeout: Per-request timeout in seconds, or None to wait forever
        session: requests.Session used as transport; may be swapped
    """

    def __init__(
        self,
        token: str,
        model: str,
        version: str,
        base_url: str = API_BASE_URL,
        api_version: str = API_VERSION,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = DEFAULT_TIMEOUT
    ):
        """
        Initialize the client. No network call is made.

        Args:
            token: Replicate API token
            model: Model identifier in "owner/model" format
            version: Model version identifier
            base_url: API host
            api_version: API version path segment
            session: Optional transport; a new requests.Session otherwise
            timeout: Per-request timeout in seconds

        Raises:
            InvalidModelIdentifierError: If model is not "owner/model"
        """
        self.owner, self.model = parse_model_identifier(model)
        self.authorization_token = token
        self.version = version
        self.base_url = base_url.rstrip('/')
        self.api_version = api_version.strip('/')
        self.timeout = timeout

        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()

    @classmethod
    def from_env(cls, model: str, version: str, **kwargs) -> "Client":
        """
        Create a client with the token (and optionally host) from the environment.

        Reads REPLICATE_API_TOKEN and REPLICATE_API_BASE_URL.

        Raises:
            UnauthorizedError: If no token is set
        """
        token = os.getenv(ENV_API_TOKEN)
        if not token:
            raise UnauthorizedError(f"{ENV_API_TOKEN} is not set")

        base_url = os.getenv(ENV_BASE_URL)
        if base_url and 'base_url' not in kwargs:
            kwargs['base_url'] = base_url

        return cls(token, model, version, **kwargs)

    # =========================================================================
    # Predictions
    # =========================================================================

    def create_prediction(self, input: Dict[str, Any]) -> Prediction:
        """
        Register an asynchronous prediction for the client's model version.

        Args:
            input: Model inputs. Binary inputs can be embedded with
                replicateapi.utils.encoding.encode_image.

        Returns:
            The prediction as created by the server, usually 'starting'
        """
        payload = self._request(
            'POST',
            PREDICTIONS_PATH,
            body={'version': self.version, 'input': input},
        )
        prediction = Prediction.from_dict(payload)
        logger.debug("Created prediction %s (%s)", prediction.id, prediction.status)
        return prediction

    def get_result(self, prediction_id: str) -> Prediction:
        """Fetch a prediction by its ID."""
        payload = self._request('GET', PREDICTION_PATH.format(prediction_id=prediction_id))
        return Prediction.from_dict(payload)

    def refresh(self, prediction: Prediction) -> None:
        """
        Update a prediction in place with its current server state.

        Every field is replaced, so values that the server no longer reports
        are reset. The prediction is left untouched when the request fails.
        Not safe to call concurrently on the same Prediction.
        """
        latest = self.get_result(prediction.id)
        prediction.replace_with(latest)

    # =========================================================================
    # Models
    # =========================================================================

    def get_model_versions_page(self) -> ModelVersionPage:
        """Fetch the first page of versions for the client's model."""
        path = MODEL_VERSIONS_PATH.format(owner=self.owner, model=self.model)
        payload = self._request('GET', path)
        page = ModelVersionPage.from_dict(payload)
        if page.next:
            logger.debug("Model %s/%s has more versions than one page", self.owner, self.model)
        return page

    def get_model_versions(self) -> List[ModelVersion]:
        """
        Return the versions of the client's model, newest first.

        Only the first page is fetched; the next cursor is not followed.
        Use get_model_versions_page to inspect it.
        """
        return self.get_model_versions_page().results

    # =========================================================================
    # Transport
    # =========================================================================

    def build_url(self, path: str) -> str:
        """Join an endpoint path onto the configured host and API version."""
        return f"{self.base_url}/{self.api_version}{path}"

    def _headers(self) -> Dict[str, str]:
        return {
            'Authorization': f"{AUTH_SCHEME} {self.authorization_token}",
            'Content-Type': CONTENT_TYPE_JSON,
        }

    def _request(self, method: str, path: str, body: Optional[Dict[str, Any]] = None) -> Any:
        """
        Send one request and return the decoded JSON body.

        The status is classified before the body is read; on error statuses
        the body is released unread.
        """
        data = encode_json_body(body) if body is not None else None
        url = self.build_url(path)

        try:
            response = self.session.request(
                method,
                url,
                headers=self._headers(),
                data=data,
                timeout=self.timeout
            )
        except requests.RequestException as e:
            raise TransportError(f"{method} {path} request: {e}") from e

        with response:
            logger.debug("%s %s -> %s", method, path, response.status_code)
            error = check_status(response.status_code)
            if error is not None:
                raise error
            return decode_json_body(response)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def close(self) -> None:
        """Close the session if the client created it."""
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(model={self.owner}/{self.model}, version={self.version})"
