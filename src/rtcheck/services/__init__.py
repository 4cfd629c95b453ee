"""Service layer — operations behind the CLI, returning ServiceResult.

Services may import from core and config.
They must never import from commands or output.
"""
