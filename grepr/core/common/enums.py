# File: grepr/core/common/enums.py

from enum import Enum, unique

@unique
class TargetKind(str, Enum):
    FILE = "file"
    DIRECTORY = "directory"

@unique
class JobStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    SKIPPED = "skipped"  # target could not be read
    FAILED = "failed"
    CANCELLED = "cancelled"

@unique
class WorkerState(str, Enum):
    IDLE = "idle"
    EXECUTING = "executing"
    STOPPED = "stopped"

@unique
class ExecutionMode(str, Enum):
    SEQUENTIAL = "sequential"
    POOLED = "pooled"
