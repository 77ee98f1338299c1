from pydantic import BaseModel
from typing import Optional, Dict, Any, List

class VerifyIn(BaseModel):
    # optional here so a missing field maps to a 400, not a schema error
    data: Optional[str] = None
    type: Optional[str] = None
    apiKey: Optional[str] = None

class VerificationResult(BaseModel):
    type: str
    veracity: str           # "true" | "false" | "uncertain"
    confidence: float       # 0..1
    reasoning: str
    explanation: str = ""

class SimpleVerificationResult(BaseModel):
    type: str
    status: str             # "valid" | "invalid" | "error"
    message: str
    details: Optional[Dict[str, Any]] = None

class VerifyOut(BaseModel):
    results: List[VerificationResult]

class SimpleVerifyOut(BaseModel):
    results: List[SimpleVerificationResult]

class ErrorOut(BaseModel):
    error: str
