"""Database package - async SQLAlchemy engine, session factory, Base, unit of work."""
from vendor_kyc.db.base import Base, async_session_factory, engine, get_db
from vendor_kyc.db.unit_of_work import run_atomic

__all__ = ["Base", "async_session_factory", "engine", "get_db", "run_atomic"]
