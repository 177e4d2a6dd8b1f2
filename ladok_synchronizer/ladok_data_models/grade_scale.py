"""
Grade scales ("betygsskalor") and the per-session cache used to resolve
grade codes coming from Canvas against them.
"""
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple
import logging

from .utils import decode_id
from ..exceptions import DecodeError, UnknownGradeError


@dataclass(frozen=True)
class GradeCode(object):
    """A single grade ("betygsgrad") within a grade scale."""
    id: int
    code: str
    valid_as_final: bool

    @classmethod
    def from_ladok_json(cls, json_obj: dict) -> 'GradeCode':
        try:
            code = json_obj['Kod']
            grade_id = json_obj['ID']
        except (KeyError, TypeError) as e:
            raise DecodeError(json_obj, 'Betygsgrad') from e
        return cls(id=decode_id(grade_id, 'Betygsgrad.ID'),
                   code=code,
                   valid_as_final=bool(json_obj.get('GiltigSomSlutbetyg',
                                                    False)))


@dataclass(frozen=True)
class GradeScale(object):

    """
    An ordered, immutable set of grade codes as returned by Ladok's
    `/resultat/grunddata/betygsskala/{id}` endpoint.
    """

    id: int
    code: str
    grades: Tuple[GradeCode, ...]

    def get(self, code: str) -> Optional[GradeCode]:
        """
        Finds a grade by its code, ignoring case. Both sides are
        upper-cased before comparing, so a stored "Fx" is found by
        "fx", "FX" or " Fx ".
        """
        code = code.strip().upper()
        for grade in self.grades:
            if grade.code.upper() == code:
                return grade
        return None

    @classmethod
    def from_ladok_json(cls, json_obj: dict) -> 'GradeScale':
        try:
            code = json_obj['Kod']
            scale_id = json_obj['ID']
        except (KeyError, TypeError) as e:
            raise DecodeError(json_obj, 'Betygsskala') from e
        return cls(id=decode_id(scale_id, 'Betygsskala.ID'),
                   code=code,
                   grades=tuple(GradeCode.from_ladok_json(g)
                                for g in json_obj.get('Betygsgrad', [])))


class GradeScaleCache(object):

    """
    Resolves grade codes against grade scales, fetching each scale at
    most once. The backing mapping is passed in so that it can be
    seeded or inspected, and it is owned by a single sync session.

    :ivar scales: the cached scales, keyed by grade scale ID
    """

    def __init__(self, fetch_scale: Callable[[int], GradeScale],
                 scales: Dict[int, GradeScale] = None):
        """
        :param fetch_scale: called with a grade scale ID on a cache miss
        :param scales: an existing mapping to use as the cache
        """
        self.logger = logging.getLogger(__name__)
        self.fetch_scale = fetch_scale
        self.scales = {} if scales is None else scales

    def get_scale(self, scale_id: int) -> GradeScale:
        try:
            return self.scales[scale_id]
        except KeyError:
            self.logger.debug(f'Fetching grade scale {scale_id}.')
            scale = self.fetch_scale(scale_id)
            self.scales[scale_id] = scale
            return scale

    def resolve_grade(self, scale_id: int, code: str) -> GradeCode:
        """
        :raises UnknownGradeError: if `code` is not in the scale
        """
        scale = self.get_scale(scale_id)
        grade = scale.get(code)
        if grade is None:
            raise UnknownGradeError(code, scale.code)
        return grade
