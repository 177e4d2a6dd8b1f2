import logging
import os

import requests

from .exceptions import SyncAuthenticationError
from .utils import get_header


class CanvasSession(requests.Session):

    """
    Extends the regular :class:`requests.Session` class to authorize
    every request to the Canvas API with a bearer token. Unless one is
    given, the token is read from the `CANVAS_API_KEY` environment
    variable.

    :ivar logging.Logger logger: module-wide logger, accessed by
        __name__
    """

    def __init__(self, token: str = None):
        super().__init__()
        self.logger = logging.getLogger(__name__)
        if token is None:
            try:
                token = os.environ['CANVAS_API_KEY']
            except KeyError:
                raise SyncAuthenticationError('CANVAS_API_KEY is not in the '
                                              'environment.')
        self.headers.update(get_header(token))
        self.logger.debug('Canvas session opened.')


class LadokSession(requests.Session):

    """
    A :class:`requests.Session` that identifies itself to Ladok with a
    client certificate. The certificate (and optionally a separate key
    file) are read from `LADOK_CERT` and `LADOK_KEY` unless given.
    """

    def __init__(self, cert: str = None, key: str = None):
        super().__init__()
        self.logger = logging.getLogger(__name__)
        if cert is None:
            try:
                cert = os.environ['LADOK_CERT']
            except KeyError:
                raise SyncAuthenticationError('LADOK_CERT is not in the '
                                              'environment.')
            key = os.environ.get('LADOK_KEY', key)
        self.cert = cert if key is None else (cert, key)
        self.headers.update({'Accept': 'application/json'})
        self.logger.debug('Ladok session opened.')
