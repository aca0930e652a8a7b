# app.py
# DEPENDENCIES
import sys
import time
import uuid
import signal
import uvicorn
from typing import Any
from typing import List
from typing import Dict
from pathlib import Path
from fastapi import File
from fastapi import Form
from fastapi import Query
from fastapi import FastAPI
from fastapi import Request
from typing import Optional
from datetime import datetime
from pydantic import BaseModel
from fastapi import UploadFile
from fastapi import HTTPException
from fastapi.responses import Response
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from fastapi.middleware.cors import CORSMiddleware

# Add parent directory to path
sys.path.append(str(Path(__file__).parent))

from utils.logger import log_info
from utils.logger import log_error
from config.settings import settings
from utils.logger import LeaseAnalyzerLogger
from utils.document_reader import DocumentReader
from config.jurisdictions import JurisdictionRules
from utils.validators import LeaseTextValidator
from utils.text_processor import TextProcessor
from services.rule_library import RuleLibrary
from services.rule_library import get_rule_library
from services.legal_lookup import LegalReferenceLookup
from reporter.pdf_generator import generate_pdf_report
from services.lease_risk_analyzer import LeaseRiskAnalyzer


# PYDANTIC SCHEMAS
class HealthResponse(BaseModel):
    status        : str
    version       : str
    timestamp     : str
    jurisdictions : int
    rules_loaded  : int
    uptime_s      : float


class LeaseAnalysisResponse(BaseModel):
    analysis_id    : str
    timestamp      : str
    summary        : str
    flags          : List[Dict[str, Any]]
    disclaimer     : str
    jurisdiction   : Optional[str] = None
    extracted_text : Optional[str] = None
    metadata       : Dict[str, Any]


class JurisdictionsResponse(BaseModel):
    supported      : List[str]
    rule_documents : Dict[str, str]
    auto_detect    : str


class ErrorResponse(BaseModel):
    error     : str
    detail    : str
    timestamp : str


# SERVICE INITIALIZATION
class LeaseAnalysisService:
    """
    Holds the loaded rule library and the components built on it for the lifetime of the app
    """
    def __init__(self, rule_library: Optional[RuleLibrary] = None):
        self.rule_library = rule_library or get_rule_library()
        self.analyzer     = LeaseRiskAnalyzer(rule_library = self.rule_library)
        self.lookup       = LegalReferenceLookup(rule_library = self.rule_library)
        self.reader       = DocumentReader()


    def analyze(self, lease_text: str, jurisdiction: Optional[str] = None) -> Dict[str, Any]:
        result = self.analyzer.analyze(document_text = lease_text, jurisdiction_override = jurisdiction)
        report = LeaseTextValidator.get_validation_report(lease_text)

        return {"analysis_id" : str(uuid.uuid4()),
                "timestamp"   : datetime.now().isoformat(),
                **result.to_dict(),
                "metadata"    : {**TextProcessor.get_text_statistics(lease_text),
                                 "lease_score"            : report["lease_score"],
                                 "likely_lease"           : report["likely_lease"],
                                 "found_indicators"       : report["found_indicators"],
                                 "requested_jurisdiction" : jurisdiction,
                                 "high_risk_count"        : result.high_risk_count,
                                 "warning_count"          : result.warning_count,
                                },
               }


    def rule_count(self) -> int:
        return len(self.rule_library.get_rules_for_jurisdiction())



# FASTAPI APPLICATION : Global instances
analysis_service : Optional[LeaseAnalysisService] = None
app_start_time                                    = time.time()

LeaseAnalyzerLogger.setup(log_dir  = str(settings.LOG_DIR),
                          level    = settings.LOG_LEVEL,
                         )


@asynccontextmanager
async def lifespan(app: FastAPI):
    global analysis_service
    log_info(f"{settings.APP_NAME} v{settings.APP_VERSION} starting up")

    # A rule library that fails to load is fatal at start-up
    analysis_service = LeaseAnalysisService()

    log_info("Lease analysis service ready",
             host          = settings.HOST,
             port          = settings.PORT,
             jurisdictions = len(analysis_service.rule_library.jurisdictions),
            )

    try:
        yield

    finally:
        log_info("Lease analysis service shut down")


app = FastAPI(title       = settings.APP_NAME,
              version     = settings.APP_VERSION,
              description = "Flags lease clauses that may violate local tenant protection law",
              docs_url    = "/api/docs",
              redoc_url   = "/api/redoc",
              lifespan    = lifespan,
             )

# CORS middleware
app.add_middleware(CORSMiddleware,
                   allow_origins     = settings.CORS_ORIGINS,
                   allow_credentials = settings.CORS_ALLOW_CREDENTIALS,
                   allow_methods     = settings.CORS_ALLOW_METHODS,
                   allow_headers     = settings.CORS_ALLOW_HEADERS,
                  )


# HELPER FUNCTIONS
def get_service() -> LeaseAnalysisService:
    if not analysis_service:
        raise HTTPException(status_code = 503,
                            detail      = "Service not initialized",
                           )

    return analysis_service


def validate_file(file: UploadFile) -> tuple[bool, str]:
    file_extension = Path(file.filename or "").suffix.lower()

    if file_extension not in settings.ALLOWED_EXTENSIONS:
        return False, f"Invalid file type. Allowed: {', '.join(settings.ALLOWED_EXTENSIONS)}"

    file.file.seek(0, 2)
    size = file.file.tell()

    file.file.seek(0)

    if (size > settings.MAX_UPLOAD_SIZE):
        return False, f"File too large. Max size: {settings.MAX_UPLOAD_SIZE / (1024*1024):.1f}MB"

    if (size == 0):
        return False, "File is empty"

    return True, "OK"


def validate_lease_text(text: str):
    is_valid, _, message = LeaseTextValidator.validate(text)

    if not is_valid:
        raise HTTPException(status_code = 400,
                            detail      = message,
                           )



# API ROUTES
@app.get("/api/v1/health", response_model = HealthResponse)
async def health_check():
    service = get_service()

    return HealthResponse(status        = "healthy",
                          version       = settings.APP_VERSION,
                          timestamp     = datetime.now().isoformat(),
                          jurisdictions = len(service.rule_library.jurisdictions),
                          rules_loaded  = service.rule_count(),
                          uptime_s      = round(time.time() - app_start_time, 1),
                         )


@app.get("/api/v1/jurisdictions", response_model = JurisdictionsResponse)
async def get_jurisdictions():
    service = get_service()

    return JurisdictionsResponse(supported      = JurisdictionRules.supported_jurisdictions(),
                                 rule_documents = service.rule_library.documents,
                                 auto_detect    = JurisdictionRules.AUTO_DETECT,
                                )


@app.post("/api/v1/lease/analyze/text", response_model = LeaseAnalysisResponse)
async def analyze_lease_text(lease_text: str = Form("", description = "Lease text to analyze"), jurisdiction: Optional[str] = Form(None)):
    service = get_service()

    validate_lease_text(lease_text)

    try:
        result = service.analyze(lease_text, jurisdiction)

    except Exception as e:
        log_error(e, context = {"operation" : "analyze_lease_text", "jurisdiction" : jurisdiction})

        raise HTTPException(status_code = 500,
                            detail      = f"Analysis failed: {repr(e)}",
                           )

    log_info("Text analysis completed",
             analysis_id  = result["analysis_id"],
             jurisdiction = result["jurisdiction"],
             flags        = len(result["flags"]),
            )

    return LeaseAnalysisResponse(**result)


@app.post("/api/v1/lease/analyze/file", response_model = LeaseAnalysisResponse)
async def analyze_lease_file(file: UploadFile = File(...), jurisdiction: Optional[str] = Form(None)):
    service           = get_service()
    is_valid, message = validate_file(file)

    if not is_valid:
        raise HTTPException(status_code = 400,
                            detail      = message,
                           )

    try:
        lease_text = service.reader.read_file(file.file, Path(file.filename).suffix)

    except ValueError as e:
        raise HTTPException(status_code = 400,
                            detail      = str(e),
                           )

    validate_lease_text(lease_text)

    try:
        result = service.analyze(lease_text, jurisdiction)

    except Exception as e:
        log_error(e, context = {"operation" : "analyze_lease_file", "filename" : file.filename})

        raise HTTPException(status_code = 500,
                            detail      = f"Analysis failed: {repr(e)}",
                           )

    log_info("File analysis completed",
             filename     = file.filename,
             analysis_id  = result["analysis_id"],
             jurisdiction = result["jurisdiction"],
             flags        = len(result["flags"]),
            )

    return LeaseAnalysisResponse(**result)


@app.get("/api/v1/lease/references")
async def get_legal_references(query: str = Query(..., min_length = 1), jurisdiction: Optional[str] = Query(None)):
    service = get_service()

    return service.lookup.search(query = query, jurisdiction = jurisdiction)


@app.post("/api/v1/lease/report")
async def generate_lease_report(analysis_result: Dict[str, Any]):
    try:
        pdf_buffer = generate_pdf_report(analysis_result = analysis_result)

    except Exception as e:
        log_error(e, context = {"operation" : "generate_lease_report"})

        raise HTTPException(status_code = 500,
                            detail      = f"Failed to generate PDF: {repr(e)}",
                           )

    analysis_id = analysis_result.get('analysis_id', 'report')

    return Response(content    = pdf_buffer.getvalue(),
                    media_type = "application/pdf",
                    headers    = {"Content-Disposition": f"attachment; filename=lease_analysis_{analysis_id}.pdf"}
                   )


# ERROR HANDLERS AND MIDDLEWARE
@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc):
    return JSONResponse(status_code = exc.status_code,
                        content     = ErrorResponse(error     = str(exc.detail),
                                                    detail    = str(exc.detail),
                                                    timestamp = datetime.now().isoformat(),
                                                   ).model_dump()
                       )


@app.exception_handler(Exception)
async def general_exception_handler(request, exc):
    log_error(exc, context = {"path" : request.url.path})

    return JSONResponse(status_code = 500,
                        content     = ErrorResponse(error     = "Internal server error",
                                                    detail    = str(exc),
                                                    timestamp = datetime.now().isoformat(),
                                                   ).model_dump()
                       )


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time   = time.time()
    response     = await call_next(request)
    process_time = time.time() - start_time

    log_info("API request",
             method     = request.method,
             path       = request.url.path,
             status     = response.status_code,
             duration_s = round(process_time, 3),
            )

    return response



# MAIN
def main():
    def signal_handler(sig, frame):
        print("\nReceived Ctrl+C, shutting down gracefully...")
        sys.exit(0)

    signal.signal(signal.SIGINT, signal_handler)

    try:
        uvicorn.run("app:app",
                    host      = settings.HOST,
                    port      = settings.PORT,
                    reload    = settings.RELOAD,
                    workers   = settings.WORKERS,
                    log_level = settings.LOG_LEVEL.lower(),
                   )

    except KeyboardInterrupt:
        print("\nServer stopped by user")

    except Exception as e:
        log_error(e, context = {"operation" : "server"})

        sys.exit(1)


if __name__ == "__main__":
    main()
