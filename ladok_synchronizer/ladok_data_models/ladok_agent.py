from typing import List, Sequence
import logging
import os

import requests

from .grade_scale import GradeScale
from .payloads import CreateResult, UpdateResult
from .study_result import ResultSearch
from .utils import KTH_LAROSATE_ID, decode_id
from ..exceptions import BatchError, FetchError
from ..page_walker import CountPageWalker
from ..utils import read_json

DEFAULT_HOST = 'api.test.ladok.se'
SEARCH_FILTER = ['OBEHANDLADE', 'UTKAST']
# The search must be ordered or pages will overlap and skip students
SEARCH_ORDER = ['EFTERNAMN_ASC', 'FORNAMN_ASC', 'PERSONNUMMER_ASC']
SEARCH_PAGE_SIZE = 100


class LadokAgent(object):

    """
    Client for the parts of the Ladok results API ("resultat") used
    when reporting grades: searching for results on a course moment,
    reading grade scales and creating or updating drafts in batches.
    """

    def __init__(self, session: requests.Session, host: str = None,
                 larosate_id: int = None):
        """
        :param session: a session carrying the client certificate, see
            :class:`LadokSession`
        :param host: defaults to the `LADOK_HOST` environment variable
        :param larosate_id: the institution ID sent with every batch,
            defaults to `LADOK_LAROSATE_ID` or KTH
        """
        if host is None:
            host = os.environ.get('LADOK_HOST', DEFAULT_HOST)
        if larosate_id is None:
            larosate_id = os.environ.get('LADOK_LAROSATE_ID', KTH_LAROSATE_ID)
        self.base_url = f'https://{host}/resultat'
        self.larosate_id = decode_id(larosate_id, 'LarosateID')
        self.session = session
        self.logger = logging.getLogger(__name__)

    def search_results(self, course_round_uid: str,
                       moment_uid: str) -> ResultSearch:
        """
        Finds every unhandled or drafted result on a course moment for
        a course round, reading all pages.

        :raises FetchError: if any page cannot be fetched
        :raises DecodeError: if an identifier in the results is invalid
        """
        url = (f'{self.base_url}/studieresultat/rapportera/'
               f'utbildningsinstans/{moment_uid}/sok')
        payload = {
            'Filtrering': SEARCH_FILTER,
            'KurstillfallenUID': [course_round_uid],
            'UtbildningsinstansUID': moment_uid,
            'OrderBy': SEARCH_ORDER,
            'Page': 1,
            'Limit': SEARCH_PAGE_SIZE
        }
        walker = CountPageWalker(self.session, logger=self.logger)
        items, total = walker.fetch_all('PUT', url, payload,
                                        items_key='Resultat',
                                        total_key='TotaltAntalPoster')
        return ResultSearch.from_ladok_json(items, total=total)

    def get_grade_scale(self, scale_id: int) -> GradeScale:
        url = f'{self.base_url}/grunddata/betygsskala/{scale_id}'
        try:
            r = self.session.get(url)
        except requests.exceptions.ConnectionError as e:
            raise FetchError(None, url=url) from e
        return GradeScale.from_ladok_json(read_json(r))

    def create_results(self, payloads: Sequence[CreateResult]) -> List[dict]:
        """
        Creates drafts for all of `payloads` in a single request.

        :raises BatchError: if Ladok rejects the batch
        :return: the created results as returned by Ladok
        """
        return self._send_batch('create', 'POST',
                                f'{self.base_url}/studieresultat/skapa',
                                payloads)

    def update_results(self, payloads: Sequence[UpdateResult]) -> List[dict]:
        """Updates existing drafts in a single request."""
        return self._send_batch('update', 'PUT',
                                f'{self.base_url}/studieresultat/uppdatera',
                                payloads)

    def _send_batch(self, kind: str, method: str, url: str,
                    payloads) -> List[dict]:
        body = {
            'LarosateID': self.larosate_id,
            'Resultat': [p.to_json() for p in payloads]
        }
        self.logger.debug(f'Sending {kind} batch of {len(payloads)} '
                          'result(s).')
        try:
            r = self.session.request(method, url, json=body)
        except requests.exceptions.ConnectionError as e:
            raise BatchError(kind, None, str(e)) from e
        try:
            r.raise_for_status()
        except requests.exceptions.HTTPError as e:
            raise BatchError(kind, r.status_code, r.text) from e
        try:
            return r.json().get('Resultat', [])
        except (AttributeError, ValueError) as e:
            raise BatchError(kind, r.status_code, r.text) from e
