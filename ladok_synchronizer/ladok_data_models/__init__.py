"""
The :mod:`ladok_data_models` package defines the objects used to read
from and report to the Ladok results API.

    - :class:`LadokAgent` performs the HTTP calls.
    - :class:`ResultSearch`, :class:`StudyResult` and
      :class:`DraftRecord` model the results found on a course moment.
    - :class:`GradeScale` and :class:`GradeScaleCache` resolve grade
      codes to their Ladok IDs.
    - :class:`CreateResult` and :class:`UpdateResult` are the payloads
      of the batch create and update requests.

Ladok is not consistent in how it serializes numeric identifiers, so
all of them pass through :func:`decode_id`.
"""

from .grade_scale import GradeCode, GradeScale, GradeScaleCache
from .ladok_agent import LadokAgent
from .payloads import CreateResult, UpdateResult
from .study_result import DraftRecord, EducationResult, ResultSearch, \
    StudyResult
from .utils import decode_id
