from datetime import tzinfo
from os import environ
from typing import List
import json
import logging
import time

from .batch_submitter import BatchSubmitter
from .outcomes import CourseReport, MomentReport
from .reconciler import Reconciler
from .. import exceptions
from ..canvas_agent import CanvasAgent
from ..canvas_data_models import Assignment, Submission
from ..ladok_data_models import GradeScaleCache, LadokAgent
from ..sessions import CanvasSession, LadokSession
from ..sync_schedule import SyncSchedule


class GradeSynchronizer(object):

    """
    A driver class that reports grades from Canvas to Ladok. Canvas is
    treated as the "master" copy of the grades; Ladok drafts are
    created or updated to match it, one course moment at a time.

    One grade scale cache is shared by every course synchronized with
    the same instance.
    """

    def __init__(self, canvas: CanvasAgent = None, ladok: LadokAgent = None,
                 dry_run: bool = None, tz: tzinfo = None):
        """
        Opens sessions with Canvas and Ladok from the environment unless
        agents are given.

        :param dry_run: classify only, defaults to the `LADOK_DRY_RUN`
            environment variable
        :param tz: time zone for examination dates, local if None
        """
        self.logger = logging.getLogger(__name__)
        self.canvas = canvas if canvas is not None \
            else CanvasAgent(CanvasSession())
        self.ladok = ladok if ladok is not None \
            else LadokAgent(LadokSession())
        if dry_run is None:
            dry_run = bool(int(environ.get('LADOK_DRY_RUN', False)))
        self.dry_run = dry_run
        """True indicates results should only be classified, not sent."""
        self.grade_cache = GradeScaleCache(self.ladok.get_grade_scale)
        self.reconciler = Reconciler(self.grade_cache,
                                     self.canvas.get_user_uid, tz=tz)
        self.submitter = BatchSubmitter(self.ladok, dry_run=dry_run)

    def run_schedule(self, s: SyncSchedule,
                     output_path: str = 'last_sync_info.json') \
            -> List[CourseReport]:
        """
        Synchronize every course room in the schedule and write a
        summary of the run to `output_path`, if given.
        """
        self.logger.info('Received the following SyncSchedule\n'
                         + json.dumps(s.to_dict(), indent=2))
        if s.dry_run:
            self.dry_run = self.submitter.dry_run = True

        reports = [self.sync_course(course) for course in s.course_rooms]
        if output_path is not None:
            output = {
                'time': time.strftime('%Y-%m-%d %H:%M:%S %Z'),
                'schedule': s.to_dict(),
                'dry_run': self.dry_run,
                'courses': [r.to_dict() for r in reports]
            }
            with open(output_path, 'w+') as f:
                json.dump(output, f, indent=2)
        return reports

    def sync_course(self, sis_course_id: str) -> CourseReport:
        """
        Reports the grades of every assignment in a course room that is
        mapped to a Ladok course moment. Failing to read the course
        from Canvas is recorded on the report and ends the course.
        """
        report = CourseReport(sis_course_id)
        try:
            course = self.canvas.get_course(sis_course_id)
            if not course.integration_id:
                raise exceptions.MissingFieldError('integration id',
                                                   sis_course_id)
            report.course_round_uid = course.integration_id
            assignments = [a for a in self.canvas.get_assignments(
                sis_course_id) if a.integration_id]
            if not assignments:
                self.logger.info(f'{sis_course_id} has no assignment mapped '
                                 'to a Ladok moment.')
                return report
            submissions = self.canvas.get_submissions(sis_course_id)
        except exceptions.SyncError as e:
            self.logger.error(f'Could not read {sis_course_id}: {e}')
            report.error = str(e)
            return report

        for assignment in assignments:
            report.moments.append(self.sync_moment(
                course.integration_id, assignment,
                [s for s in submissions if s.assignment_id == assignment.id]
            ))
        return report

    def sync_moment(self, course_round_uid: str, assignment: Assignment,
                    submissions: List[Submission]) -> MomentReport:
        moment_uid = assignment.integration_id
        report = MomentReport(moment_uid, assignment_id=assignment.id)
        self.logger.info(f'Reporting assignment {assignment.id} on moment '
                         f'{moment_uid} of course round {course_round_uid}.')
        try:
            search = self.ladok.search_results(course_round_uid, moment_uid)
            report.students = self.reconciler.reconcile(submissions,
                                                        moment_uid, search)
        except (exceptions.FetchError, exceptions.DecodeError) as e:
            self.logger.error(f'Could not reconcile moment {moment_uid}: {e}')
            report.error = str(e)
            return report

        for s in report.students:
            self.logger.info(f'{s.student}: {s.outcome.status_line()}')
        report.batch = self.submitter.flush(report.students)
        self.logger.info(f'Moment {moment_uid}: {report.status_line()}')
        return report
