"""
The possible outcomes of reconciling one student on one course moment,
and the reports built from them. Each outcome knows how to describe
itself in a one-line status.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Union

from ..ladok_data_models import CreateResult, UpdateResult


class Outcome(object):

    def status_line(self) -> str:
        raise NotImplementedError

    def to_dict(self) -> dict:
        return {'action': self.__class__.__name__,
                'status': self.status_line()}


@dataclass
class Create(Outcome):
    payload: CreateResult
    grade: str

    def status_line(self) -> str:
        return 'Created'


@dataclass
class Update(Outcome):
    payload: UpdateResult
    grade: str

    def status_line(self) -> str:
        return f'Updated ({self.grade})'


@dataclass
class NoChange(Outcome):
    grade: str

    def status_line(self) -> str:
        return f'No change ({self.grade})'


@dataclass
class NoGrade(Outcome):

    def status_line(self) -> str:
        return 'No grade'


@dataclass
class Error(Outcome):
    reason: str

    def status_line(self) -> str:
        return f'Error ({self.reason})'


@dataclass
class StudentOutcome(object):
    """The outcome for one Canvas user on one moment."""
    student: Union[int, str, None]
    outcome: Outcome

    def to_dict(self) -> dict:
        as_dict = self.outcome.to_dict()
        as_dict['student'] = self.student
        return as_dict


@dataclass
class BatchReport(object):
    """
    What happened when the queues of one moment were flushed. A failed
    batch is recorded here and does not change any `StudentOutcome`.
    """
    created: int = 0
    updated: int = 0
    errors: List[str] = field(default_factory=list)

    def status_line(self) -> str:
        out = f'created {self.created}, updated {self.updated}'
        if self.errors:
            return out + '; ' + '; '.join(self.errors)
        return out


@dataclass
class MomentReport(object):

    moment_uid: str
    assignment_id: Optional[int] = None
    students: List[StudentOutcome] = field(default_factory=list)
    batch: Optional[BatchReport] = None
    error: Optional[str] = None

    def status_line(self) -> str:
        if self.error is not None:
            return f'Error ({self.error})'
        if self.batch is None:
            return 'Not submitted'
        return self.batch.status_line()

    def to_dict(self) -> dict:
        return {
            'moment': self.moment_uid,
            'assignment': self.assignment_id,
            'status': self.status_line(),
            'students': [s.to_dict() for s in self.students]
        }


@dataclass
class CourseReport(object):

    sis_course_id: str
    course_round_uid: Optional[str] = None
    moments: List[MomentReport] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and all(
            m.error is None and (m.batch is None or not m.batch.errors)
            for m in self.moments
        )

    def to_dict(self) -> dict:
        return {
            'course': self.sis_course_id,
            'course_round': self.course_round_uid,
            'error': self.error,
            'moments': [m.to_dict() for m in self.moments]
        }
