from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional, List, Dict, Literal

class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class ValidationResult(CamelModel):
    email: str
    is_valid: bool = False
    score: Optional[int] = None  # 0-100, provider-specific heuristic
    domain: Optional[str] = None
    status: Optional[str] = None
    has_mailbox: Optional[bool] = None
    is_disposable: Optional[bool] = None
    is_free: Optional[bool] = None
    is_role: Optional[bool] = None
    syntax_valid: Optional[bool] = None
    mx_valid: Optional[bool] = None
    smtp_valid: Optional[bool] = None
    suggestion: Optional[str] = None
    error: Optional[str] = None
    provider: Optional[str] = None
    timestamp: str

class ValidationSettings(CamelModel):
    provider: str = Field("mslm", min_length=1)
    batch_size: int = Field(5, ge=1)
    timeout: int = Field(30000, ge=1, description="Per-call timeout in milliseconds")

class ProviderDescription(BaseModel):
    id: str
    name: str
    description: str

class GeneratedEmail(CamelModel):
    email: str
    first_name: str
    last_name: str
    domain: str
    source_row: Optional[int] = None

class CsvTable(BaseModel):
    headers: List[str] = []
    rows: List[Dict[str, str]] = []

class ColumnMapping(CamelModel):
    first_name: str = ""
    last_name: str = ""
    domain: str = ""

TaskStatus = Literal["pending", "processing", "completed", "failed"]
RunStatus = Literal["ready", "validating", "paused", "completed"]

class ValidationTask(CamelModel):
    email: str
    status: TaskStatus = "pending"
    result: Optional[ValidationResult] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    duration: Optional[int] = None  # ms

class BatchRunSnapshot(CamelModel):
    id: str
    status: RunStatus
    total: int
    processed: int
    progress: int
    valid_count: int
    tasks: List[ValidationTask] = []

class ProviderTestResult(CamelModel):
    provider: str
    result: Optional[ValidationResult] = None
    error: Optional[str] = None
    duration: int = 0  # ms
    timestamp: str

class ProviderAccuracy(BaseModel):
    valid: int = 0
    invalid: int = 0
    total: int = 0

class ComparisonStats(CamelModel):
    total_tests: int
    successful_tests: int
    failed_tests: int
    average_duration: float
    fastest_provider: str
    slowest_provider: str
    accuracy_by_provider: Dict[str, ProviderAccuracy] = Field(default_factory=dict)

# Request bodies

class EmailInput(BaseModel):
    email: str

class BulkEmailInput(BaseModel):
    emails: List[str] = Field(default_factory=list)

class PersonInput(CamelModel):
    first_name: str
    last_name: str
    domain: str

class CsvInput(BaseModel):
    csv: str

class CsvMappingInput(CamelModel):
    csv: str
    mapping: ColumnMapping

class CsvRunInput(CsvMappingInput):
    batch_size: int = Field(5, ge=1)
    delay_ms: int = Field(1000, ge=0)

class CompareInput(BaseModel):
    emails: List[str] = Field(default_factory=list)
    providers: Optional[List[str]] = None

class CompareOutput(BaseModel):
    tests: List[ProviderTestResult] = []
    stats: Optional[ComparisonStats] = None

class ResultsInput(BaseModel):
    results: List[ValidationResult] = []
