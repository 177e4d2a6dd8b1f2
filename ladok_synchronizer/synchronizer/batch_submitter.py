from typing import List, Sequence
import logging

from .outcomes import BatchReport, Create, StudentOutcome, Update
from .. import exceptions
from ..ladok_data_models import CreateResult, LadokAgent, UpdateResult


class BatchSubmitter(object):

    """
    Sends the create and update intents of one course moment to Ladok,
    each kind as a single request that Ladok applies as one unit. Empty
    queues are never sent.

    When `dry_run` is set nothing is sent and the counts are those of
    the queued intents.
    """

    def __init__(self, agent: LadokAgent, dry_run: bool = False):
        self.agent = agent
        self.dry_run = dry_run
        self.logger = logging.getLogger(__name__)

    def submit_creates(self, payloads: Sequence[CreateResult]) -> int:
        """
        :raises BatchError: if the batch is rejected; none of its
            results are created
        :return: the number of results Ladok returned
        """
        if not payloads:
            return 0
        if self.dry_run:
            self.logger.info(f'Dry run: would create {len(payloads)} '
                             'result(s).')
            return len(payloads)
        return len(self.agent.create_results(payloads))

    def submit_updates(self, payloads: Sequence[UpdateResult]) -> int:
        if not payloads:
            return 0
        if self.dry_run:
            self.logger.info(f'Dry run: would update {len(payloads)} '
                             'result(s).')
            return len(payloads)
        return len(self.agent.update_results(payloads))

    def flush(self, outcomes: List[StudentOutcome]) -> BatchReport:
        """
        Queues the `Create` and `Update` outcomes and submits both
        queues. A failed batch is reported on the returned
        :class:`BatchReport`; the outcomes themselves are left as they
        were classified.
        """
        creates = [o.outcome.payload for o in outcomes
                   if isinstance(o.outcome, Create)]
        updates = [o.outcome.payload for o in outcomes
                   if isinstance(o.outcome, Update)]
        self.logger.info(f'There are {len(creates)} results to create and '
                         f'{len(updates)} to update.')

        report = BatchReport()
        try:
            report.created = self.submit_creates(creates)
        except exceptions.BatchError as e:
            self.logger.error(str(e))
            report.errors.append(str(e))
        try:
            report.updated = self.submit_updates(updates)
        except exceptions.BatchError as e:
            self.logger.error(str(e))
            report.errors.append(str(e))
        return report
