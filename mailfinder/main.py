from typing import List
import uvicorn
from fastapi import BackgroundTasks, Depends, FastAPI, HTTPException, Request
from fastapi.responses import Response
from mailfinder.models.schemas import (
    BatchRunSnapshot,
    BulkEmailInput,
    CompareInput,
    CompareOutput,
    CsvInput,
    CsvMappingInput,
    CsvRunInput,
    CsvTable,
    EmailInput,
    GeneratedEmail,
    PersonInput,
    ProviderDescription,
    ResultsInput,
    ValidationResult,
    ValidationSettings,
)
from mailfinder.pipeline.batch_run import BatchRun, RunRegistry
from mailfinder.pipeline.comparison import calculate_stats, compare_bulk
from mailfinder.pipeline.csv_io import (
    CsvFormatError,
    export_filename,
    export_results,
    export_test_results,
    export_valid_emails,
    generate_emails_from_csv,
    parse_csv,
)
from mailfinder.pipeline.permutations import generate_emails
from mailfinder.pipeline.settings_store import SettingsStore
from mailfinder.config.settings import settings
from mailfinder.pipeline.validation import ValidationService
from mailfinder.utils.log import get_logger

logger = get_logger("mailfinder")

app = FastAPI(title="Mailfinder", version="0.1.0")
app.state.service = ValidationService(SettingsStore.from_settings())
app.state.runs = RunRegistry()

def get_service(request: Request) -> ValidationService:
    return request.app.state.service

def get_runs(request: Request) -> RunRegistry:
    return request.app.state.runs

def _csv_response(text: str, prefix: str) -> Response:
    headers = {"Content-Disposition": f'attachment; filename="{export_filename(prefix)}"'}
    return Response(content=text, media_type="text/csv", headers=headers)

def _generate_from_csv(body: CsvMappingInput) -> List[GeneratedEmail]:
    try:
        return generate_emails_from_csv(parse_csv(body.csv), body.mapping)
    except CsvFormatError as e:
        raise HTTPException(status_code=400, detail=str(e))

def _get_run(runs: RunRegistry, run_id: str) -> BatchRun:
    run = runs.get(run_id)
    if not run:
        raise HTTPException(status_code=404, detail="Run not found")
    return run

@app.get("/health")
def health():
    return {"ok": True}

@app.get("/providers", response_model=List[ProviderDescription])
def list_providers(service: ValidationService = Depends(get_service)):
    return service.registry.describe()

@app.get("/settings", response_model=ValidationSettings)
def read_settings(service: ValidationService = Depends(get_service)):
    return service.get_settings()

@app.put("/settings", response_model=ValidationSettings)
def write_settings(new: ValidationSettings, service: ValidationService = Depends(get_service)):
    if new.provider not in service.registry:
        raise HTTPException(status_code=400, detail=f"Unknown provider: {new.provider}")
    service.save_settings(new)
    logger.info("settings saved: provider=%s batchSize=%d", new.provider, new.batch_size)
    return service.get_settings()

@app.post("/validate", response_model=ValidationResult)
async def validate(body: EmailInput, service: ValidationService = Depends(get_service)):
    return await service.validate_email(body.email.strip())

@app.post("/validate/bulk", response_model=List[ValidationResult])
async def validate_bulk(body: BulkEmailInput, service: ValidationService = Depends(get_service)):
    emails = [e.strip() for e in body.emails if e.strip()]
    return await service.validate_bulk_emails(emails)

def _person_emails(person: PersonInput) -> List[GeneratedEmail]:
    first, last, domain = person.first_name.strip(), person.last_name.strip(), person.domain.strip()
    if not first or not last or not domain:
        raise HTTPException(status_code=400, detail="firstName, lastName and domain are required")
    return generate_emails(first, last, domain)

@app.post("/generate", response_model=List[GeneratedEmail])
def generate(person: PersonInput):
    return _person_emails(person)

@app.post("/generate/validate", response_model=List[ValidationResult])
async def generate_and_validate(person: PersonInput, service: ValidationService = Depends(get_service)):
    generated = _person_emails(person)
    return await service.validate_bulk_emails([g.email for g in generated])

@app.post("/csv/parse", response_model=CsvTable)
def csv_parse(body: CsvInput):
    try:
        return parse_csv(body.csv)
    except CsvFormatError as e:
        raise HTTPException(status_code=400, detail=str(e))

@app.post("/csv/generate", response_model=List[GeneratedEmail])
def csv_generate(body: CsvMappingInput):
    return _generate_from_csv(body)

@app.post("/csv/runs", response_model=BatchRunSnapshot)
async def csv_run_create(
    body: CsvRunInput,
    background: BackgroundTasks,
    service: ValidationService = Depends(get_service),
    runs: RunRegistry = Depends(get_runs),
):
    generated = _generate_from_csv(body)
    run = runs.add(BatchRun(service, generated, batch_size=body.batch_size, delay_s=body.delay_ms / 1000))
    logger.info("run %s created with %d generated emails", run.id, run.total)
    background.add_task(run.start)
    return run.snapshot()

@app.get("/csv/runs/{run_id}", response_model=BatchRunSnapshot)
def csv_run_status(run_id: str, runs: RunRegistry = Depends(get_runs)):
    return _get_run(runs, run_id).snapshot()

@app.post("/csv/runs/{run_id}/pause", response_model=BatchRunSnapshot)
def csv_run_pause(run_id: str, runs: RunRegistry = Depends(get_runs)):
    run = _get_run(runs, run_id)
    run.pause()
    return run.snapshot()

@app.post("/csv/runs/{run_id}/resume", response_model=BatchRunSnapshot)
async def csv_run_resume(run_id: str, background: BackgroundTasks, runs: RunRegistry = Depends(get_runs)):
    run = _get_run(runs, run_id)
    background.add_task(run.resume)
    return run.snapshot()

@app.get("/csv/runs/{run_id}/export")
def csv_run_export(run_id: str, runs: RunRegistry = Depends(get_runs)):
    run = _get_run(runs, run_id)
    return _csv_response(export_valid_emails(run.valid_results, run.emails), "valid-emails")

@app.post("/compare", response_model=CompareOutput)
async def compare(body: CompareInput, service: ValidationService = Depends(get_service)):
    unknown = [p for p in body.providers or [] if p not in service.registry]
    if unknown:
        raise HTTPException(status_code=400, detail=f"Unknown providers: {', '.join(unknown)}")
    timeout_s = service.get_settings().timeout / 1000
    tests = await compare_bulk(body.emails, service.registry, body.providers, timeout_s=timeout_s)
    return CompareOutput(tests=tests, stats=calculate_stats(tests))

@app.post("/export/results")
def export(body: ResultsInput):
    return _csv_response(export_results(body.results), "email-results")

@app.post("/export/tests")
def export_tests(body: CompareOutput):
    return _csv_response(export_test_results(body.tests), "email-test-results")

def run():
    uvicorn.run("mailfinder.main:app", host="0.0.0.0", port=settings.PORT)
