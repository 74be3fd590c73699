"""
DaVinci User Admin.

- core/: Configuration, logging, exceptions
- schemas/: Pydantic models for credentials, users and requests
- storage/: Local JSON blob files used for bulk import, export and delete
- services/: User lifecycle operations (export, import, delete, create)
- client.py: Request dispatcher (httpx)
- session.py: Session token acquisition
- shell.py: Interactive menu loop (Rich)
"""

__version__ = "1.0.0"
