"""
Prompt construction for the verification model.

A prompt is a fixed preamble, the data and type, the JSON shape the model
must answer with, then a bullet list of rules picked by type. Unknown types
get the `custom` rules.
"""

EXTENDED = "extended"
SIMPLE = "simple"

_PREAMBLE = """You are a data verification expert. Analyze the following data and provide a JSON response with verification results.

Data to verify: "{data}"
Verification type: {type}

Please provide a JSON response in this exact format:
{shape}

Verification rules for {type}:"""

_SHAPES = {
    EXTENDED: """{
  "veracity": "true|false|uncertain",
  "confidence": 0.95,
  "reasoning": "Detailed explanation of why the data is or is not valid"
}""",
    SIMPLE: """{
  "status": "valid|invalid|error",
  "message": "Detailed explanation of the verification result",
  "details": {
    "confidence": 0.95,
    "issues": ["list of any issues found"],
    "suggestions": ["list of suggestions for improvement"]
  }
}""",
}

RULES = {
    "email": """
- Check if it follows standard email format (user@domain.com)
- Validate domain structure
- Check for common email patterns
- Identify potential issues like missing @ symbol, invalid characters, etc.""",

    "phone": """
- Check if it follows phone number format
- Validate country code if present
- Check for proper length and structure
- Identify common phone number patterns""",

    "credit-card": """
- Check if it follows credit card number patterns
- Validate Luhn algorithm (checksum)
- Identify card type if possible
- Check for proper length and format""",

    "ssn": """
- Check if it follows SSN format (XXX-XX-XXXX)
- Validate it's not a test number (000, 666, 900-999)
- Check for proper length and structure""",

    "address": """
- Check if it contains street, city, state, zip components
- Validate address structure
- Check for proper formatting
- Identify missing or invalid components""",

    "custom": """
- Analyze the data for general validity
- Check for common data quality issues
- Provide suggestions for improvement
- Identify any obvious errors or inconsistencies""",

    "medical-claim": """
- Compare the claim against current scientific and clinical consensus
- Check whether the claim is supported by peer-reviewed evidence
- Flag exaggerated, absolute or miracle-cure language
- Note when the claim requires consultation with a healthcare professional""",

    "drug-info": """
- Check drug names, indications and dosage against approved labeling
- Identify known contraindications and major interactions
- Flag dosages outside typical therapeutic ranges
- Note whether the drug requires a prescription""",

    "symptom-check": """
- Check whether the described symptoms are consistent with the stated condition
- List common alternative explanations for the symptoms
- Flag symptoms that warrant urgent medical attention
- Do not provide a definitive diagnosis""",

    "treatment-verify": """
- Check whether the treatment is recognized in clinical guidelines for the condition
- Assess the strength of evidence behind the treatment
- Identify significant risks or side effects
- Flag unproven or potentially harmful alternatives""",
}


def rules_for(type: str) -> str:
    return RULES.get(type, RULES["custom"])


def build_prompt(data: str, type: str, shape: str = EXTENDED) -> str:
    """
    Render the instruction sent to the model.

    `shape` selects the answer keys: EXTENDED asks for
    {veracity, confidence, reasoning}, SIMPLE for {status, message, details}.
    """
    head = _PREAMBLE.format(data=data, type=type, shape=_SHAPES[shape])
    return head + rules_for(type)
