from datetime import date, tzinfo
from typing import Callable, Iterable, List
import logging

from .outcomes import (Create, Error, NoChange, NoGrade, Outcome,
                       StudentOutcome, Update)
from .. import exceptions
from ..canvas_data_models import Submission
from ..ladok_data_models import (CreateResult, GradeScaleCache, ResultSearch,
                                 UpdateResult)


class Reconciler(object):

    """
    Decides, for each graded Canvas submission on a course moment,
    whether Ladok needs a new draft, an updated draft or nothing at
    all. The reconciler only classifies; it never sends anything.

    A draft is considered up to date only when both its grade and its
    examination date match the submission, so a student re-graded with
    the same grade on a later date still produces an update.

    Problems with a single student's data are recorded as an
    :class:`Error` outcome for that student and do not stop the others.
    """

    def __init__(self, grade_cache: GradeScaleCache,
                 resolve_student: Callable[[int], str],
                 tz: tzinfo = None):
        """
        :param grade_cache: the session's grade scale cache
        :param resolve_student: maps a Canvas user ID to a Ladok
            student UID
        :param tz: the time zone in which the graded-at timestamp is
            turned into an examination date, local time if None
        """
        self.grade_cache = grade_cache
        self.resolve_student = resolve_student
        self.tz = tz
        self.logger = logging.getLogger(__name__)

    def reconcile(self, submissions: Iterable[Submission], moment_uid: str,
                  search: ResultSearch) -> List[StudentOutcome]:
        """
        Classifies every submission, in order.

        :raises DecodeError: if a grade scale fetched along the way is
            malformed
        :raises FetchError: if a grade scale cannot be fetched
        """
        return [StudentOutcome(s.user_id,
                               self.reconcile_submission(s, moment_uid,
                                                         search))
                for s in submissions]

    def reconcile_submission(self, submission: Submission, moment_uid: str,
                             search: ResultSearch) -> Outcome:
        if not submission.grade:
            self.logger.debug(f'No grade for user {submission.user_id}.')
            return NoGrade()
        try:
            return self._classify(submission, moment_uid, search)
        except (exceptions.MissingFieldError,
                exceptions.UnknownGradeError) as e:
            self.logger.info(f'Skipping user {submission.user_id}: {e}')
            return Error(str(e))

    def _classify(self, submission: Submission, moment_uid: str,
                  search: ResultSearch) -> Outcome:
        student = self._student_uid(submission)
        result = search.find_student(student)
        if result is None:
            raise exceptions.MissingFieldError('result', student)

        scale_id = result.get_grade_scale()
        if scale_id is None:
            raise exceptions.MissingFieldError('grade scale', student)
        grade = self.grade_cache.resolve_grade(scale_id, submission.grade)
        exam_date = self._exam_date(submission, student)

        draft = result.get_draft(moment_uid)
        if draft is None or draft.uid is None:
            if result.uid is None:
                raise exceptions.MissingFieldError('study result UID',
                                                   student)
            self.logger.debug(f'Creating {grade.code} for {student}.')
            return Create(CreateResult(study_result_uid=result.uid,
                                       grade_code_id=grade.id,
                                       grade_scale_id=scale_id,
                                       exam_date=exam_date,
                                       moment_uid=moment_uid),
                          grade=grade.code)

        if (draft.grade_code_id, draft.exam_date) == (grade.id, exam_date):
            self.logger.debug(f'Grade {grade.code} up to date for {student}.')
            return NoChange(grade=grade.code)

        self.logger.debug(f'Updating grade from {draft.grade_code_id} on '
                          f'{draft.exam_date} to {grade.id} on {exam_date} '
                          f'for {student}.')
        return Update(UpdateResult(study_result_uid=result.uid,
                                   result_uid=draft.uid,
                                   last_modified=draft.last_modified,
                                   grade_code_id=grade.id,
                                   grade_scale_id=scale_id,
                                   exam_date=exam_date),
                      grade=grade.code)

    def _student_uid(self, submission: Submission) -> str:
        if submission.user_id is None:
            raise exceptions.MissingFieldError('user', 'submission')
        try:
            return self.resolve_student(submission.user_id)
        except (exceptions.FetchError, KeyError) as e:
            raise exceptions.MissingFieldError(
                'Ladok UID', f'user {submission.user_id}') from e

    def _exam_date(self, submission: Submission, student: str) -> date:
        if submission.graded_at is None:
            raise exceptions.MissingFieldError('graded-at', student)
        return submission.graded_at.astimezone(self.tz).date()
