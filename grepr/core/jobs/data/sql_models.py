import uuid
from sqlalchemy import Column, String, Integer, DateTime, Enum as SQLEnum, Uuid
from grepr.core.database.base import Base
from grepr.core.common.enums import JobStatus
from grepr.core.jobs.domain.models import utc_now

class JobModel(Base):
    __tablename__ = "jobs"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # All jobs of one orchestrator run share a run_id
    run_id = Column(Uuid(as_uuid=True), nullable=False, index=True)
    sequence = Column(Integer, nullable=False, default=0)

    label = Column(String, nullable=False)  # e.g. "Directory: src"
    status = Column(SQLEnum(JobStatus), default=JobStatus.PENDING)
    result_count = Column(Integer, default=0)

    created_at = Column(DateTime(timezone=True), default=utc_now)
    started_at = Column(DateTime(timezone=True), nullable=True)
    finished_at = Column(DateTime(timezone=True), nullable=True)

    error_message = Column(String, nullable=True)
