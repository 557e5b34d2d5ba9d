"""
Command line interface for the Replicate API client.

Usage:
    replicateapi versions OWNER/MODEL
    replicateapi predict OWNER/MODEL VERSION -i prompt="a cat" -i image=@cat.png --wait
    replicateapi get OWNER/MODEL VERSION PREDICTION_ID

The token is read from --token or REPLICATE_API_TOKEN (a .env file in the
working directory is loaded first).
"""

import argparse
import json
import logging
import os
import sys
import time
from datetime import datetime
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

from replicateapi.config import (
    DEFAULT_POLL_INTERVAL,
    DEFAULT_TIMEOUT,
    DEFAULT_WAIT_TIMEOUT,
    ENV_API_TOKEN,
    ENV_BASE_URL,
    API_BASE_URL,
)
from replicateapi.models.base import Prediction, PredictionStatus
from replicateapi.models.client import Client
from replicateapi.models.errors import ReplicateError
from replicateapi.utils.encoding import encode_file
from replicateapi.utils.logger import SIMPLE_FORMAT, get_logger, setup_logger

logger = get_logger('replicateapi.cli')


def parse_input_pairs(pairs: List[str]) -> Dict[str, Any]:
    """
    Parse key=value command line inputs into a prediction input mapping.

    Values starting with '@' are read from disk and embedded as data URIs.
    Values that parse as JSON (numbers, booleans, lists, objects) are decoded;
    anything else is kept as a plain string.

    Args:
        pairs: Strings of the form key=value

    Returns:
        Input mapping for create_prediction

    Raises:
        ValueError: If an entry has no '=' or an empty key
    """
    inputs: Dict[str, Any] = {}
    for pair in pairs:
        key, sep, value = pair.partition('=')
        if not sep or not key:
            raise ValueError(f"Invalid input '{pair}', expected key=value")

        if value.startswith('@'):
            inputs[key] = encode_file(value[1:])
            continue

        try:
            inputs[key] = json.loads(value)
        except ValueError:
            inputs[key] = value
    return inputs


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, PredictionStatus):
        return value.value
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def prediction_to_dict(prediction: Prediction) -> Dict[str, Any]:
    """Render a prediction in the API's JSON layout."""
    return {
        'id': prediction.id,
        'version': prediction.version,
        'status': prediction.status.value,
        'created_at': prediction.created_at,
        'started_at': prediction.started_at,
        'completed_at': prediction.completed_at,
        'input': prediction.input,
        'output': prediction.output,
        'error': prediction.error,
        'logs': prediction.logs,
        'metrics': prediction.metrics,
        'urls': {'get': prediction.get_url, 'cancel': prediction.cancel_url},
    }


def print_json(value: Any) -> None:
    print(json.dumps(value, indent=2, default=_json_default))


def wait_for_prediction(
    client: Client,
    prediction: Prediction,
    interval: float = DEFAULT_POLL_INTERVAL,
    timeout: Optional[float] = DEFAULT_WAIT_TIMEOUT
) -> bool:
    """
    Refresh a prediction until it reaches a final status.

    Args:
        client: Client used for refreshing
        prediction: Prediction to update in place
        interval: Seconds between refreshes
        timeout: Give up after this many seconds; None waits forever

    Returns:
        True if the prediction finished, False on timeout
    """
    deadline = time.monotonic() + timeout if timeout is not None else None

    while not prediction.is_terminal:
        if deadline is not None and time.monotonic() >= deadline:
            return False
        time.sleep(interval)
        client.refresh(prediction)
        logger.info(f"Prediction {prediction.id}: {prediction.status}")
    return True


def exit_code(prediction: Prediction) -> int:
    """Return 1 for a failed or canceled prediction, 0 otherwise."""
    if prediction.status in (PredictionStatus.FAILED, PredictionStatus.CANCELED):
        return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='replicateapi', description='Replicate API client')
    parser.add_argument('--token', '-k', help=f'API token (default: ${ENV_API_TOKEN})')
    parser.add_argument('--base-url', help=f'API host (default: ${ENV_BASE_URL} or {API_BASE_URL})')
    parser.add_argument('--request-timeout', type=float, default=DEFAULT_TIMEOUT,
                        help='Per-request timeout (seconds)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Log requests')
    parser.add_argument('--log-file', help='Also write logs to this file')

    subparsers = parser.add_subparsers(dest='command', required=True)

    versions = subparsers.add_parser('versions', help='List model versions, newest first')
    versions.add_argument('model', help='Model identifier (owner/model)')

    predict = subparsers.add_parser('predict', help='Create a prediction')
    predict.add_argument('model', help='Model identifier (owner/model)')
    predict.add_argument('version', help='Model version ID')
    predict.add_argument('--input', '-i', action='append', default=[], metavar='KEY=VALUE',
                         help='Model input; prefix a value with @ to upload a file')
    predict.add_argument('--wait', '-w', action='store_true',
                         help='Poll until the prediction finishes')
    predict.add_argument('--interval', type=float, default=DEFAULT_POLL_INTERVAL,
                         help='Delay between polls (seconds)')
    predict.add_argument('--timeout', type=float, default=DEFAULT_WAIT_TIMEOUT,
                         help='Maximum time to wait (seconds)')

    get = subparsers.add_parser('get', help='Show a prediction')
    get.add_argument('model', help='Model identifier (owner/model)')
    get.add_argument('version', help='Model version ID')
    get.add_argument('prediction_id', help='Prediction ID')

    return parser


def run(args: argparse.Namespace, client: Client) -> int:
    if args.command == 'versions':
        versions = client.get_model_versions()
        for version in versions:
            print(f"{version.id}\t{version.created_at.isoformat()}\t{version.cog_version}")
        return 0

    if args.command == 'get':
        prediction = client.get_result(args.prediction_id)
        print_json(prediction_to_dict(prediction))
        return exit_code(prediction)

    prediction = client.create_prediction(parse_input_pairs(args.input))
    if args.wait and not wait_for_prediction(client, prediction, args.interval, args.timeout):
        print(f"Timed out waiting for prediction {prediction.id}", file=sys.stderr)
        print_json(prediction_to_dict(prediction))
        return 1

    print_json(prediction_to_dict(prediction))
    return exit_code(prediction)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function for command line execution
    """
    load_dotenv()

    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logger(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        log_file=args.log_file,
        format_string=SIMPLE_FORMAT
    )

    token = args.token or os.getenv(ENV_API_TOKEN)
    if not token:
        print(f"Error: No API token provided. Set {ENV_API_TOKEN} or use --token", file=sys.stderr)
        return 1

    base_url = args.base_url or os.getenv(ENV_BASE_URL) or API_BASE_URL
    version = getattr(args, 'version', '')

    try:
        with Client(token, args.model, version, base_url=base_url,
                    timeout=args.request_timeout) as client:
            return run(args, client)
    except (ReplicateError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
