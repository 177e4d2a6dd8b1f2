#!/usr/bin/env python3
from logging.config import dictConfig
from typing import Union
import argparse
import logging
import os
import json

from ladok_synchronizer import GradeSynchronizer, SyncSchedule, exceptions


def setup_logging(config_file: str = None, log_dir: str = None,
                  log_level: Union[str, int] = None) -> dict:
    if config_file is None:
        config_file = os.path.join(os.getcwd(), 'logging_config.json')

    if log_level is None:
        log_level = os.environ.get('LOGLEVEL', logging.INFO)

    with open(config_file, 'r') as f:
        config = json.load(f)

    for obj_type in 'loggers', 'handlers':
        obj: dict
        for obj in config[obj_type].values():
            if obj['level'] in ('NOTSET', logging.NOTSET):
                # Use environment variable if level is not set
                obj['level'] = log_level
            if (obj_type == 'handlers'
                    and log_dir is not None
                    and 'filename' in obj.keys()):
                obj['filename'] = os.path.join(log_dir, obj['filename'])

    return config


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description='Report Canvas grades to Ladok.'
    )
    parser.add_argument('course_rooms', nargs='*',
                        help='SIS ids of the Canvas course rooms, '
                             'overrides the schedule')
    parser.add_argument('-n', '--dry-run', action='store_true',
                        help='classify results without sending them')
    return parser.parse_args()


def main():
    args = parse_args()
    logging_config = setup_logging(log_dir=os.environ.get('LOGDIR'))
    dictConfig(logging_config)

    logger = logging.getLogger(__name__)
    schedule_path = os.environ.get('SCHEDULE_PATH', 'sync_schedule.json')
    try:
        schedule = SyncSchedule.from_json(schedule_path)
    except FileNotFoundError:
        schedule = SyncSchedule.default()
    if args.course_rooms:
        schedule.course_rooms = args.course_rooms
    if args.dry_run:
        schedule.dry_run = True

    try:
        sync_agent = GradeSynchronizer()
        for report in sync_agent.run_schedule(schedule):
            if not report.ok:
                logger.warning(f'{report.sis_course_id} finished with '
                               'errors.')
    except exceptions.SyncError:
        logger.exception('Could not finish sync.')


if __name__ == '__main__':
    main()
