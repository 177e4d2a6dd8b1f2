"""
This module coordinates reporting Canvas grades to Ladok. The main
class is `GradeSynchronizer`, found in the `grade_synchronizer`
submodule. It makes use of two helpers:

    - `Reconciler` compares each graded submission with the student's
        Ladok draft and classifies it as a create, an update, no
        change, no grade or an error.
    - `BatchSubmitter` sends all creates and all updates of a course
        moment as one request each.

The outcomes and the reports built from them live in `outcomes`.
"""

from .batch_submitter import BatchSubmitter
from .grade_synchronizer import GradeSynchronizer
from .reconciler import Reconciler
