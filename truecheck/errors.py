class VerifyError(Exception):
    """Base class for errors raised while handling a verification."""


class InvalidRequestError(VerifyError):
    """The inbound request is missing a required field."""


class ModelCallError(VerifyError):
    """The call to the text-generation endpoint did not produce a reply."""


class UpstreamError(ModelCallError):
    def __init__(self, status_code: int):
        super().__init__(f"Model API error: {status_code}")
        self.status_code = status_code


class NetworkError(ModelCallError):
    pass


class ParseError(VerifyError):
    """The model reply holds no decodable JSON object."""
