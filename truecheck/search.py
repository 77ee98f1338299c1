import httplib2
from googleapiclient.discovery import build
from typing import Dict, List

from .config import settings
from .log import get_logger

logger = get_logger(__name__)

SUMMARY_LIMIT = 200

# candidate queries per type; only the first is sent
QUERIES = {
    "email": ["email address format validation RFC 5322", "email domain MX record verification"],
    "phone": ["phone number format validation E.164", "international dialing code reference"],
    "credit-card": ["Luhn algorithm verification", "credit card number IIN ranges", "card number length by issuer"],
    "ssn": ["Social Security Number format validation rules", "SSA invalid SSN ranges 000 666 900"],
    "address": ["USPS postal address format standards", "address verification components street city zip"],
    "medical-claim": ['"{data}" scientific evidence', "{data} clinical studies", "{data} medical consensus"],
    "drug-info": ["{data} drug label dosage", "{data} interactions contraindications", "{data} FDA"],
    "symptom-check": ["{data} symptoms causes", "{data} when to see a doctor"],
    "treatment-verify": ["{data} treatment clinical guidelines", "{data} treatment effectiveness evidence"],
    "custom": ["{data} verification", "{data} fact check"],
}
DEFAULT_QUERIES = ["{data} {type} verification", "{data} {type}"]

MOCK_SOURCES = {
    "email": ["rfc-editor.org", "ietf.org"],
    "phone": ["itu.int", "fcc.gov"],
    "credit-card": ["iso.org", "pcisecuritystandards.org"],
    "ssn": ["ssa.gov", "irs.gov"],
    "address": ["usps.com", "upu.int"],
    "medical-claim": ["nih.gov", "who.int", "mayoclinic.org"],
    "drug-info": ["fda.gov", "medlineplus.gov", "drugs.com"],
    "symptom-check": ["mayoclinic.org", "nhs.uk", "cdc.gov"],
    "treatment-verify": ["nih.gov", "cochranelibrary.com", "nice.org.uk"],
}
DEFAULT_SOURCES = ["google.com", "wikipedia.org"]

MOCK_EXPLANATIONS = {
    "email": "Email formats are defined by RFC 5322; a valid address needs a local part, a single @ and a resolvable domain.",
    "phone": "Phone numbers follow the ITU E.164 plan: a country code followed by a national number of at most 15 digits in total.",
    "credit-card": "Card numbers carry a Luhn checksum digit and an issuer prefix that fixes the expected length.",
    "ssn": "The SSA never issues numbers with area 000, 666 or 900-999, group 00 or serial 0000.",
    "address": "A deliverable address needs a street line, city, state and ZIP code in the postal service's standard order.",
    "medical-claim": "Medical claims should be checked against peer-reviewed research and guidance from public health agencies.",
    "drug-info": "Drug dosage and interaction details should match the official prescribing information for the product.",
    "symptom-check": "Symptoms overlap across many conditions; persistent or severe symptoms should be assessed by a clinician.",
    "treatment-verify": "Treatments are best judged against current clinical practice guidelines and systematic reviews.",
}
DEFAULT_EXPLANATION = "General data verification relies on consistency checks and comparison with trusted reference sources."


def mock_explanation(type: str) -> str:
    sources = ", ".join(MOCK_SOURCES.get(type, DEFAULT_SOURCES))
    text = MOCK_EXPLANATIONS.get(type, DEFAULT_EXPLANATION)
    return f"Based on reference material from {sources}: {text}"


def search_queries(data: str, type: str) -> List[str]:
    templates = QUERIES.get(type, DEFAULT_QUERIES)
    return [t.format(data=data, type=type) for t in templates]


def web_search(query: str, num: int = 5) -> list:
    """
    Run one Programmable Search query and return its result items.
    """
    http = httplib2.Http(timeout=settings.REQUEST_TIMEOUT)
    svc = build("customsearch", "v1", developerKey=settings.GOOGLE_SEARCH_API_KEY,
                http=http, cache_discovery=False)
    try:
        res = svc.cse().list(q=query, cx=settings.GOOGLE_SEARCH_ENGINE_ID, num=num, safe="active").execute()
    finally:
        svc.close()
    return res.get("items", []) or []


def summarize_items(items: list, type: str) -> str:
    """
    Turn search hits into a one-line explanation citing their domains.
    The summary is cut at a fixed character count, not on word boundaries.
    """
    if not items:
        return f"No authoritative sources found for this {type} verification."

    top = items[:3]
    sources = ", ".join(it.get("displayLink", "") for it in top)
    summary = " ".join(f"{it.get('title', '')}: {it.get('snippet', '')}" for it in top)
    return f"Based on research from authoritative health sources ({sources}), {summary[:SUMMARY_LIMIT]}..."


def augment(data: str, type: str) -> Dict[str, str]:
    """
    Research explanation for a verification. Never raises: without search
    credentials, or on any failure, the canned explanation for `type` is used.
    """
    if not settings.search_enabled:
        return {"explanation": mock_explanation(type)}

    try:
        query = search_queries(data, type)[0]
        items = web_search(query)
        return {"explanation": summarize_items(items, type)}
    except Exception as e:
        logger.warning(f"Search augmentation failed for type={type}: {e.__class__.__name__}")
        return {"explanation": mock_explanation(type)}
