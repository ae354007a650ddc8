import logging
from typing import Any, Dict, List
from uuid import UUID

from grepr.core.database.connection import SessionLocal
from .sql_models import JobModel
from ..domain.interfaces import IJobRepository
from ..domain.models import Job

logger = logging.getLogger(__name__)

class SqlJobRepository(IJobRepository):

    def record_run(self, run_id: UUID, jobs: List[Job]) -> int:
        with SessionLocal() as db:
            try:
                for job in jobs:
                    db.add(JobModel(
                        id=job.id,
                        run_id=run_id,
                        sequence=job.sequence,
                        label=job.label,
                        status=job.status,
                        result_count=job.result_count,
                        created_at=job.created_at,
                        started_at=job.started_at,
                        finished_at=job.finished_at,
                        error_message=job.error_message
                    ))
                db.commit()
            except Exception as e:
                db.rollback()
                logger.error(f"Failed to record run {run_id}: {e}")
                raise e

        logger.info(f"Recorded {len(jobs)} jobs for run {run_id}")
        return len(jobs)

    def list_run(self, run_id: UUID) -> List[Dict[str, Any]]:
        with SessionLocal() as db:
            rows = (
                db.query(JobModel)
                .filter(JobModel.run_id == run_id)
                .order_by(JobModel.sequence)
                .all()
            )
            return [
                {
                    "id": row.id,
                    "sequence": row.sequence,
                    "label": row.label,
                    "status": row.status,
                    "result_count": row.result_count,
                    "error": row.error_message
                }
                for row in rows
            ]
