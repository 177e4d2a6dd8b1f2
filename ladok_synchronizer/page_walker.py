from copy import deepcopy
from typing import Generator, List, Tuple
import logging

import requests

from .exceptions import DecodeError, FetchError
from .utils import check_response, get_next_url, read_json


def _send(session: requests.Session, method: str, url: str,
          **kwargs) -> requests.Response:
    try:
        r = session.request(method, url, **kwargs)
    except requests.exceptions.ConnectionError as e:
        raise FetchError(None, url=url) from e
    return check_response(r)


class LinkPageWalker(object):
    """
    Walks over paginated responses that announce the following page in
    a `Link` header, as Canvas does.
    """
    def __init__(self, session: requests.Session,
                 logger: logging.Logger = None):
        """
        :param session: an authenticated requests session
        :param logger: custom logger
        """
        if logger is None:
            self.logger = logging.getLogger(__name__)
        else:
            self.logger = logger
        self.session = session

    def walk(self, url: str, params: dict = None) \
            -> Generator[requests.Response, None, None]:
        """
        A generator over the successful responses of a paginated GET.
        The query parameters are only sent with the first request since
        the next URL already carries them.

        :param url: the URL of the first page
        :param params: query parameters for the first request
        :raises FetchError: on the first page that fails
        """
        current_page = 1
        next_url = url
        while next_url is not None:
            r = _send(self.session, 'GET', next_url,
                      params=params if current_page == 1 else None)
            self.logger.debug(f'Read page {current_page} of {url}.')
            yield r
            next_url = get_next_url(r.headers.get('link'))
            current_page += 1

    def fetch_all(self, url: str, params: dict = None) -> List[dict]:
        """Concatenates the JSON list bodies of every page in order."""
        items = []
        for r in self.walk(url, params=params):
            page = read_json(r)
            if not isinstance(page, list):
                raise DecodeError(page, url)
            items.extend(page)
        self.logger.info(f'Fetched {len(items)} item(s) from {url}.')
        return items


class CountPageWalker(object):

    """
    Walks over paginated responses where the request body names the
    page and the response body reports the total number of records, as
    Ladok's search endpoints do. The same payload, including its
    ordering, is sent for every page with only the page number changed.
    Without a deterministic ordering the pages may overlap or skip
    records.
    """

    page_key = 'Page'
    limit_key = 'Limit'

    def __init__(self, session: requests.Session,
                 logger: logging.Logger = None):
        if logger is None:
            self.logger = logging.getLogger(__name__)
        else:
            self.logger = logger
        self.session = session

    def fetch_all(self, method: str, url: str, payload: dict,
                  items_key: str, total_key: str) -> Tuple[List[dict], int]:
        """
        Requests pages until as many items as the reported total have
        been collected.

        :param method: the HTTP method, Ladok searches use PUT
        :param url: the search URL
        :param payload: the search body, must hold the page number
        :param items_key: the response field holding the page's items
        :param total_key: the response field holding the total count
        :raises FetchError: if any page fails
        :raises DecodeError: if a page lacks the items or total fields
        :return: the accumulated items and the reported total
        """
        data = deepcopy(payload)
        data.setdefault(self.page_key, 1)
        items, total = self._read_page(method, url, data, items_key,
                                       total_key)

        while len(items) < total:
            data[self.page_key] += 1
            page_items, _ = self._read_page(method, url, data, items_key,
                                            total_key)
            if not page_items:
                self.logger.warning(f'Page {data[self.page_key]} of {url} was '
                                    f'empty after {len(items)}/{total} items.')
                break
            items.extend(page_items)

        self.logger.info(f'Got {len(items)} of {total} results, after '
                         f'fetching {data[self.page_key]} page(s) of up to '
                         f'{data.get(self.limit_key)} records.')
        return items, total

    def _read_page(self, method: str, url: str, data: dict, items_key: str,
                   total_key: str) -> Tuple[List[dict], int]:
        as_json = read_json(_send(self.session, method, url, json=data))
        try:
            items = as_json[items_key]
            total = as_json[total_key]
        except (KeyError, TypeError) as e:
            raise DecodeError(as_json, url) from e
        if not isinstance(items, list) or isinstance(total, bool):
            raise DecodeError(as_json, url)
        try:
            return items, int(total)
        except (TypeError, ValueError) as e:
            raise DecodeError(total, total_key) from e
