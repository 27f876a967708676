"""
transport — dostarczanie wyniku ekstrakcji stronie odbierającej.

Publiczne API:
  ResultEmitter(transport).emit(goals)
  HttpTransport, StdoutTransport, CallbackTransport
  encode_payload(goals) -> str,  decode_payload(payload) -> GoalList
"""

from .emitter import (
    CallbackTransport,
    HttpTransport,
    ResultEmitter,
    StdoutTransport,
    Transport,
    decode_payload,
    encode_payload,
    goals_to_json,
)

__all__ = [
    "CallbackTransport",
    "HttpTransport",
    "ResultEmitter",
    "StdoutTransport",
    "Transport",
    "decode_payload",
    "encode_payload",
    "goals_to_json",
]
