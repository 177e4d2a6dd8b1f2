from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from .utils import decode_optional_id, parse_ladok_date
from ..exceptions import DecodeError


@dataclass
class DraftRecord(object):

    """
    A result ("Resultat") on a single course moment. Used both for the
    editable draft ("Arbetsunderlag") and for the latest attested
    result. `last_modified` is kept exactly as Ladok sent it since it
    must be echoed back on update for Ladok to detect stale writes.
    """

    uid: Optional[str]
    grade_code_id: Optional[int]
    grade_scale_id: Optional[int]
    exam_date: Optional[date]
    last_modified: Optional[str]
    study_result_uid: Optional[str]
    moment_uid: Optional[str]

    @classmethod
    def from_ladok_json(cls, json_obj: dict) -> 'DraftRecord':
        return cls(
            uid=json_obj.get('Uid'),
            grade_code_id=decode_optional_id(json_obj.get('Betygsgrad'),
                                             'Betygsgrad'),
            grade_scale_id=decode_optional_id(json_obj.get('BetygsskalaID'),
                                              'BetygsskalaID'),
            exam_date=parse_ladok_date(json_obj.get('Examinationsdatum')),
            last_modified=json_obj.get('SenasteResultatandring'),
            study_result_uid=json_obj.get('StudieresultatUID'),
            moment_uid=json_obj.get('UtbildningsinstansUID')
        )


@dataclass
class EducationResult(object):
    """One entry of "ResultatPaUtbildningar"."""
    draft: Optional[DraftRecord] = None
    attested: Optional[DraftRecord] = None
    education_uid: Optional[str] = None

    @classmethod
    def from_ladok_json(cls, json_obj: dict) -> 'EducationResult':
        draft = json_obj.get('Arbetsunderlag')
        attested = json_obj.get('SenastAttesteradeResultat')
        return cls(
            draft=DraftRecord.from_ladok_json(draft) if draft else None,
            attested=(DraftRecord.from_ladok_json(attested)
                      if attested else None),
            education_uid=json_obj.get('UtbildningUID')
        )


@dataclass
class StudyResult(object):

    """
    A student's result container for a course ("Studieresultat"), as
    found in the results of a reporting search.
    """

    uid: Optional[str]
    student_uid: Optional[str]
    grade_scale_id: Optional[int]
    education_results: List[EducationResult] = field(default_factory=list)

    def get_draft(self, moment_uid: str) -> Optional[DraftRecord]:
        """
        Returns the first draft on the given course moment. Ladok keeps
        at most one live draft per moment.
        """
        for result in self.education_results:
            draft = result.draft
            if draft is not None and draft.moment_uid == moment_uid:
                return draft
        return None

    def get_grade_scale(self) -> Optional[int]:
        return self.grade_scale_id

    @classmethod
    def from_ladok_json(cls, json_obj: dict) -> 'StudyResult':
        student = json_obj.get('Student') or {}
        context = json_obj.get('Rapporteringskontext') or {}
        return cls(
            uid=json_obj.get('Uid'),
            student_uid=student.get('Uid'),
            grade_scale_id=decode_optional_id(context.get('BetygsskalaID'),
                                              'BetygsskalaID'),
            education_results=[
                EducationResult.from_ladok_json(r)
                for r in json_obj.get('ResultatPaUtbildningar') or []
            ]
        )


class ResultSearch(object):

    """
    The accumulated pages of a reporting search
    ("SokresultatStudieresultatResultat") for one course moment. Taken
    as a point-in-time baseline and not re-fetched during a sync.
    """

    def __init__(self, results: List[StudyResult], total: int = None):
        self.results = results
        self.total = len(results) if total is None else total

    def __len__(self):
        return len(self.results)

    def __iter__(self):
        return iter(self.results)

    def find_student(self, student_uid: str) -> Optional[StudyResult]:
        for result in self.results:
            if result.student_uid == student_uid:
                return result
        return None

    @classmethod
    def from_ladok_json(cls, json_objs: List[dict],
                        total: int = None) -> 'ResultSearch':
        try:
            results = [StudyResult.from_ladok_json(obj) for obj in json_objs]
        except AttributeError as e:
            raise DecodeError(json_objs, 'Resultat') from e
        return cls(results, total=total)
