# File: grepr/core/database/base.py

from sqlalchemy.orm import declarative_base

# The shared registry. Persisted job history inherits from this.
Base = declarative_base()
