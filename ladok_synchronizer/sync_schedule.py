from typing import IO, List, Union
import json
import os


class SyncSchedule(object):

    """
    Which Canvas course rooms to report to Ladok. You can pass a
    :class:`SyncSchedule` object to the
    :meth:`GradeSynchronizer.run_schedule` method to synchronize every
    course room it lists.

    Use the :meth:`from_json` method to build an object from a JSON
    file on the disk and the :meth:`default` method to build one from
    the comma-separated `SYNC_COURSE_ROOMS` environment variable.
    """

    def __init__(self, course_rooms: List[str], dry_run: bool = False):
        self.course_rooms = list(course_rooms)
        self.dry_run = bool(dry_run)

    def __str__(self):
        return f'{self.__class__.__name__}({str(self.to_dict())})'

    __repr__ = __str__

    @classmethod
    def default(cls) -> 'SyncSchedule':
        rooms = os.environ.get('SYNC_COURSE_ROOMS', '')
        return cls([room.strip() for room in rooms.split(',')
                    if room.strip()])

    @classmethod
    def from_json(cls, json_path: Union[str, IO]) -> 'SyncSchedule':
        """Creates a schedule from a JSON file."""
        if isinstance(json_path, str):
            with open(json_path, 'r') as f:
                return cls(**json.load(f))
        with json_path:
            return cls(**json.load(json_path))

    def to_dict(self) -> dict:
        return self.__dict__
