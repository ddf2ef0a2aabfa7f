from __future__ import annotations


class CalcError(Exception):
    pass


class NotFound(CalcError):
    pass


class BadRequest(CalcError):
    pass
