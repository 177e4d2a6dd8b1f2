from typing import Any, Optional


class SyncError(Exception):

    def __init__(self, e=None):
        self.error = e

    def __str__(self):
        out = 'There was an error when synchronizing Canvas and Ladok'
        if self.error is None:
            return out + '.'
        else:
            return f'{out}:\n{self.error}'


class FetchError(SyncError):
    """
    Raised when a request to either Canvas or Ladok does not come back
    with a success status. Any partially collected pages are discarded.
    """
    def __init__(self, status: Optional[int], body: str = None,
                 url: str = None):
        self.status = status
        self.body = body
        self.url = url

    def __str__(self):
        if self.status is None:
            return f'Could not reach {self.url}.'
        out = f'Got status {self.status} on {self.url}'
        if self.body:
            return f'{out}:\n{self.body}'
        return out + '.'


class DecodeError(SyncError):
    """Raised when an identifier field cannot be decoded."""
    def __init__(self, value: Any, field: str = None):
        self.value = value
        self.field = field

    def __str__(self):
        where = f' in field "{self.field}"' if self.field else ''
        return f'Invalid identifier{where}: {self.value!r}'


class UnknownGradeError(SyncError):

    def __init__(self, code: str, scale_code: str):
        self.code = code
        self.scale_code = scale_code

    def __str__(self):
        return f'Grade {self.code!r} not in {self.scale_code}'


class MissingFieldError(SyncError):
    """
    A record lacks a field required to make a decision about it, e.g.
    a submission without a graded-at timestamp or a result without a
    grade scale.
    """
    def __init__(self, field: str, subject: Any = None):
        self.field = field
        self.subject = subject

    def __str__(self):
        if self.subject is None:
            return f'Missing {self.field}'
        return f'Missing {self.field} for {self.subject}'


class BatchError(SyncError):

    def __init__(self, kind: str, status: Optional[int], body: str = None):
        self.kind = kind
        self.status = status
        self.body = body

    def __str__(self):
        out = f'Batch {self.kind} failed with status {self.status}'
        if self.body:
            return f'{out}:\n{self.body}'
        return out + '.'


class SyncAuthenticationError(SyncError):

    def __init__(self, msg: str = None):
        self.msg = msg

    def __str__(self):
        if self.msg is None:
            return 'There was a problem with API authentication.'
        else:
            return self.msg
