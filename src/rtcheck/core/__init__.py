"""Core layer — value kinds, descriptors, combinators and the call wrapper.

This layer depends on stdlib, pydantic and structlog.  It must never import
from services, commands, or output.  The only config it reads is the
initial toggle state (see :mod:`rtcheck.core.toggle`).
"""
