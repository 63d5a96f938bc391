# offline sync models: queued writes and sync status

from pydantic import BaseModel, Field


class QueuedWriteResponse(BaseModel):
    """returned instead of the row when the backend is offline"""
    queued: bool = True
    queue_id: str = Field(..., alias="queueId")
    type: str
    message: str = "You're offline. This entry was saved on this device and will sync when the connection returns."

    model_config = {"populate_by_name": True}


class SyncStatusResponse(BaseModel):
    online: bool
    pending: int
    pending_total: int = Field(..., alias="pendingTotal")

    model_config = {"populate_by_name": True}


class ConnectivitySignal(BaseModel):
    online: bool


class SyncResultResponse(BaseModel):
    synced: list[str] = Field(default_factory=list)
    failed: list[str] = Field(default_factory=list)
    remaining: int = 0
