import asyncio
import time
import uuid
from typing import Dict, List
from mailfinder.models.schemas import (
    BatchRunSnapshot,
    GeneratedEmail,
    RunStatus,
    ValidationResult,
    ValidationTask,
)
from mailfinder.pipeline.validation import ValidationService
from mailfinder.utils.clock import iso_now
from mailfinder.utils.log import get_logger

logger = get_logger("mailfinder-batch-run")

class BatchRun:
    """
    Pausable validation of generated emails, tracked task by task.

    Pausing only stops the next chunk from being scheduled; calls already in
    flight finish normally. Starting again picks up the pending tasks, and
    resuming before the in-flight chunk lands simply cancels the pause.
    """

    def __init__(
        self,
        service: ValidationService,
        emails: List[GeneratedEmail],
        batch_size: int = 5,
        delay_s: float = 1.0,
    ):
        self.id = uuid.uuid4().hex
        self.service = service
        self.emails = emails
        self.batch_size = max(1, batch_size)
        self.delay_s = delay_s
        self.tasks = [ValidationTask(email=e.email) for e in emails]
        self.valid_results: List[ValidationResult] = []
        self.status: RunStatus = "ready"
        self._paused = False

    @property
    def total(self) -> int:
        return len(self.tasks)

    @property
    def processed(self) -> int:
        return sum(1 for t in self.tasks if t.status in ("completed", "failed"))

    @property
    def progress(self) -> int:
        return round(self.processed / self.total * 100) if self.total else 100

    def pause(self) -> None:
        if self.status == "validating":
            self._paused = True

    async def resume(self) -> None:
        if self.status == "validating":
            # the loop has not seen the pause yet, so it carries on
            self._paused = False
            return
        await self.start()

    async def _process(self, index: int) -> None:
        task = self.tasks[index]
        task.status = "processing"
        task.start_time = iso_now()
        started = time.perf_counter()
        try:
            result = await self.service.validate_email(task.email)
            task.status = "completed"
        except Exception as e:
            logger.warning("task %s failed: %s", task.email, e)
            result = ValidationResult(
                email=task.email,
                is_valid=False,
                error=str(e) or "Validation error",
                provider=self.service.get_settings().provider,
                timestamp=iso_now(),
            )
            task.status = "failed"
        task.result = result
        task.end_time = iso_now()
        task.duration = int((time.perf_counter() - started) * 1000)
        if result.is_valid:
            self.valid_results.append(result)

    async def start(self) -> None:
        if self.status in ("validating", "completed"):
            return
        self._paused = False
        self.status = "validating"
        logger.info("run %s: validating %d emails", self.id, self.total)

        for i in range(0, self.total, self.batch_size):
            if self._paused:
                break
            pending = [j for j in range(i, min(i + self.batch_size, self.total)) if self.tasks[j].status == "pending"]
            if not pending:
                continue
            await asyncio.gather(*(self._process(j) for j in pending))
            logger.debug("run %s: %d/%d", self.id, self.processed, self.total)

            if i + self.batch_size < self.total and not self._paused:
                await asyncio.sleep(self.delay_s)

        if self._paused:
            self.status = "paused"
            logger.info("run %s paused at %d/%d", self.id, self.processed, self.total)
        else:
            self.status = "completed"
            logger.info("run %s completed, %d valid emails", self.id, len(self.valid_results))

    def snapshot(self) -> BatchRunSnapshot:
        return BatchRunSnapshot(
            id=self.id,
            status=self.status,
            total=self.total,
            processed=self.processed,
            progress=self.progress,
            valid_count=len(self.valid_results),
            tasks=[t.model_copy() for t in self.tasks],
        )

class RunRegistry:
    def __init__(self):
        self._runs: Dict[str, BatchRun] = {}

    def add(self, run: BatchRun) -> BatchRun:
        self._runs[run.id] = run
        return run

    def get(self, run_id: str) -> BatchRun | None:
        return self._runs.get(run_id)
