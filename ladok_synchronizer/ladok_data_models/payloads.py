from dataclasses import dataclass
from datetime import date
from typing import Optional

from .utils import format_ladok_date


@dataclass(frozen=True)
class CreateResult(object):

    """
    A request to create a draft result on a course moment ("SkapaResultat").
    `study_result_uid` is the container the new draft is attached to.
    """

    study_result_uid: str
    grade_code_id: int
    grade_scale_id: int
    exam_date: date
    moment_uid: str

    def to_json(self) -> dict:
        return {
            'Uid': self.study_result_uid,
            'Betygsgrad': self.grade_code_id,
            'BetygsskalaID': self.grade_scale_id,
            'Examinationsdatum': format_ladok_date(self.exam_date),
            'StudieresultatUID': self.study_result_uid,
            'UtbildningsinstansUID': self.moment_uid
        }


@dataclass(frozen=True)
class UpdateResult(object):

    """
    A request to change an existing draft ("UppdateraResultat").
    `last_modified` is the draft's "SenasteResultatandring" exactly as
    it was read.
    """

    study_result_uid: Optional[str]
    result_uid: str
    last_modified: Optional[str]
    grade_code_id: int
    grade_scale_id: int
    exam_date: date

    def to_json(self) -> dict:
        return {
            'Uid': self.study_result_uid,
            'Betygsgrad': self.grade_code_id,
            'BetygsskalaID': self.grade_scale_id,
            'Examinationsdatum': format_ladok_date(self.exam_date),
            'ResultatUID': self.result_uid,
            'SenasteResultatandring': self.last_modified
        }
