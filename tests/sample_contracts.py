"""Descriptors imported by CLI tests through ``tests.sample_contracts:...``."""

from rtcheck import Array, Number, String, option, shape

USER = shape(
    {
        "name": String(),
        "age": Number(within=(0, 150)),
        "tags": option(Array(type=String())),
    }
)

POINT = shape([Number(), Number()])

NOT_A_DESCRIPTOR = {"name": "plain dict"}
