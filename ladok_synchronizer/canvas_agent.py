"""
The module serves as an interface for reading course rooms,
assignments and submissions from the Canvas API. Every call raises
:class:`FetchError` when Canvas does not answer with a success status.

Submissions are paginated by Canvas with a `Link` header and are read
with a :class:`LinkPageWalker`.
"""

from typing import List
import logging
import os

import requests

from .canvas_data_models import Assignment, CourseRoom, Submission
from .exceptions import FetchError
from .page_walker import LinkPageWalker
from .utils import read_json

DEFAULT_HOST = 'kth.test.instructure.com'
SUBMISSIONS_PER_PAGE = 100


class CanvasAgent(object):

    def __init__(self, session: requests.Session, host: str = None):
        """
        :param session: an authenticated session, see
            :class:`CanvasSession`
        :param host: the Canvas host name, defaults to the `CANVAS_HOST`
            environment variable
        """
        if host is None:
            host = os.environ.get('CANVAS_HOST', DEFAULT_HOST)
        self.base_url = f'https://{host}/api/v1'
        self.session = session
        self.logger = logging.getLogger(__name__)

    def _get_json(self, url: str, params: dict = None):
        try:
            r = self.session.get(url, params=params)
        except requests.exceptions.ConnectionError as e:
            raise FetchError(None, url=url) from e
        return read_json(r)

    def get_course(self, sis_course_id: str) -> CourseRoom:
        """
        :param sis_course_id: the SIS id of the course room, e.g.
            "LT1016VT191"
        """
        url = f'{self.base_url}/courses/sis_course_id:{sis_course_id}'
        return CourseRoom.from_canvas_json(self._get_json(url))

    def get_assignments(self, sis_course_id: str) -> List[Assignment]:
        url = (f'{self.base_url}/courses/sis_course_id:{sis_course_id}'
               '/assignments')
        return [Assignment.from_canvas_json(obj)
                for obj in self._get_json(url)]

    def get_submissions(self, sis_course_id: str) -> List[Submission]:
        """Gets the submissions of every student on every assignment."""
        url = (f'{self.base_url}/courses/sis_course_id:{sis_course_id}'
               '/students/submissions')
        params = {'student_ids[]': 'all', 'per_page': SUBMISSIONS_PER_PAGE}
        walker = LinkPageWalker(self.session, logger=self.logger)
        return [Submission.from_canvas_json(obj)
                for obj in walker.fetch_all(url, params=params)]

    def get_user_uid(self, user_id: int) -> str:
        """Maps a Canvas user to the student's Ladok UID."""
        url = f'{self.base_url}/users/{user_id}/custom_data/ladok_uid'
        return self._get_json(url, params={'ns': 'se.kth'})['data']
