from datetime import datetime
from typing import Any, Optional

from requests import Response
from requests.utils import parse_header_links
import requests

from .exceptions import DecodeError, FetchError

# Canvas timestamps, e.g. 2024-01-10T12:00:00Z
CANVAS_DATETIME_FORMAT = '%Y-%m-%dT%H:%M:%S%z'


def get_header(token) -> dict:
    return {
        'Authorization': f'Bearer {token}',
        'Accept': 'application/json'
    }


def get_next_url(links: Optional[str]) -> Optional[str]:
    """
    Extracts the URL marked `rel="next"` from a `Link` header of the
    form `<url>; rel="current",<url>; rel="next"`. Returns None when
    there is no next page.
    """
    if not links:
        return None
    for link in parse_header_links(links):
        if link.get('rel') == 'next':
            return link.get('url')
    return None


def check_response(r: Response) -> Response:
    """Raises a `FetchError` for any non-success status."""
    try:
        r.raise_for_status()
    except requests.exceptions.HTTPError as e:
        raise FetchError(r.status_code, r.text, r.url) from e
    return r


def read_json(r: Response) -> Any:
    """
    The JSON body of a successful response.

    :raises FetchError: for any non-success status
    :raises DecodeError: if the body is not JSON
    """
    check_response(r)
    try:
        return r.json()
    except ValueError as e:
        raise DecodeError(r.text, r.url) from e


def parse_canvas_datetime(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.strptime(value, CANVAS_DATETIME_FORMAT)
    except (TypeError, ValueError) as e:
        raise DecodeError(value, 'graded_at') from e
