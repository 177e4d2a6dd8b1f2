"""
Read-only views of the Canvas objects the synchronizer needs. They are
fetched fresh on every run and never written back. Malformed fields
raise :class:`DecodeError`.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .exceptions import DecodeError
from .utils import parse_canvas_datetime


def _to_int(value, field: str) -> int:
    if isinstance(value, bool):
        raise DecodeError(value, field)
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise DecodeError(value, field) from e


def _optional_int(value, field: str) -> Optional[int]:
    return None if value is None else _to_int(value, field)


@dataclass
class CourseRoom(object):
    """
    A Canvas course, which is really a course room for a single round.
    `integration_id` is the Ladok course round ("kurstillfälle").
    """
    integration_id: Optional[str]
    name: Optional[str] = None

    @classmethod
    def from_canvas_json(cls, json_obj: dict) -> 'CourseRoom':
        return cls(integration_id=json_obj.get('integration_id') or None,
                   name=json_obj.get('name'))


@dataclass
class Assignment(object):
    """
    A gradable activity. `integration_id` is the Ladok course moment
    ("utbildningsinstans") it reports to, if any.
    """
    id: int
    integration_id: Optional[str]
    name: Optional[str] = None

    @classmethod
    def from_canvas_json(cls, json_obj: dict) -> 'Assignment':
        return cls(id=_to_int(json_obj.get('id'), 'id'),
                   integration_id=json_obj.get('integration_id') or None,
                   name=json_obj.get('name'))


@dataclass
class Submission(object):

    assignment_id: Optional[int]
    user_id: Optional[int]
    grade: Optional[str]
    graded_at: Optional[datetime]
    grader_id: Optional[int]

    @classmethod
    def from_canvas_json(cls, json_obj: dict) -> 'Submission':
        return cls(
            assignment_id=_optional_int(json_obj.get('assignment_id'),
                                        'assignment_id'),
            user_id=_optional_int(json_obj.get('user_id'), 'user_id'),
            grade=json_obj.get('grade'),
            graded_at=parse_canvas_datetime(json_obj.get('graded_at')),
            grader_id=_optional_int(json_obj.get('grader_id'), 'grader_id')
        )
