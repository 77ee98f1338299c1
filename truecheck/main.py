# truecheck/main.py
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import settings
from .errors import InvalidRequestError, ModelCallError
from .log import get_logger
from .model import call_model, extract_result, extract_simple_result
from .models import (
    ErrorOut, SimpleVerificationResult, SimpleVerifyOut, VerificationResult, VerifyIn, VerifyOut,
)
from .prompts import SIMPLE, build_prompt
from .search import augment

logger = get_logger(__name__)

app = FastAPI(title="TrueCheck Verification API")

MISSING_FIELDS = "Missing required fields: data, type, or apiKey"

FALLBACK_RESULT = VerificationResult(
    type="unknown",
    veracity="uncertain",
    confidence=0.0,
    reasoning="Failed to process verification request",
    explanation="Unable to complete verification at this time.",
)

SIMPLE_FALLBACK_RESULT = SimpleVerificationResult(
    type="unknown",
    status="error",
    message="Failed to process verification request",
)

# --- Middleware ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Error handlers ---
@app.exception_handler(InvalidRequestError)
async def invalid_request_handler(request: Request, exc: InvalidRequestError):
    return JSONResponse(status_code=400, content={"error": str(exc)})


@app.exception_handler(RequestValidationError)
async def malformed_body_handler(request: Request, exc: RequestValidationError):
    # bodies that are not a JSON object get the same answer as missing fields
    return JSONResponse(status_code=400, content={"error": MISSING_FIELDS})


# --- Helper Functions ---
def require_fields(payload: VerifyIn) -> None:
    if not payload.data or not payload.type or not payload.apiKey:
        raise InvalidRequestError(MISSING_FIELDS)


def run_model_leg(payload: VerifyIn) -> VerificationResult:
    prompt = build_prompt(payload.data, payload.type)
    try:
        raw = call_model(prompt, payload.apiKey)
    except ModelCallError as e:
        logger.warning(f"Model leg failed for type={payload.type}: {e.__class__.__name__}")
        return VerificationResult(
            type=payload.type,
            veracity="uncertain",
            confidence=0.0,
            reasoning="Sorry, the AI verification service could not be reached. Please check your API key and try again.",
        )
    return extract_result(raw, payload.type)


# --- Routes ---

@app.get("/health")
def health():
    return {"ok": True, "model": settings.MODEL_NAME, "search": "live" if settings.search_enabled else "mock"}


@app.post("/api/verify", response_model=VerifyOut, responses={400: {"model": ErrorOut}})
def verify(payload: VerifyIn):
    """
    Verify one piece of data:
    - Asks the model for a {veracity, confidence, reasoning} judgment
    - Adds a research explanation from web search (canned in mock mode)
    """
    require_fields(payload)
    try:
        result = run_model_leg(payload)
        research = augment(payload.data, payload.type)
        merged = result.model_copy(update={"explanation": research["explanation"]})
        logger.info(f"Verified type={payload.type} veracity={merged.veracity}")
        return {"results": [merged]}
    except Exception:
        logger.exception("Verification API error")
        return JSONResponse(status_code=500, content={"results": [FALLBACK_RESULT.model_dump()]})


@app.post("/api/v1/verify", response_model=SimpleVerifyOut, responses={400: {"model": ErrorOut}})
def verify_v1(payload: VerifyIn):
    """Legacy contract: {status, message, details} from the model alone."""
    require_fields(payload)
    try:
        prompt = build_prompt(payload.data, payload.type, shape=SIMPLE)
        try:
            raw = call_model(prompt, payload.apiKey)
        except ModelCallError as e:
            logger.warning(f"Model leg failed for type={payload.type}: {e.__class__.__name__}")
            result = SimpleVerificationResult(type=payload.type, status="error",
                                              message="Failed to call the AI verification service")
        else:
            result = extract_simple_result(raw, payload.type)
        return {"results": [result]}
    except Exception:
        logger.exception("Verification API error")
        return JSONResponse(status_code=500, content={"results": [SIMPLE_FALLBACK_RESULT.model_dump()]})
