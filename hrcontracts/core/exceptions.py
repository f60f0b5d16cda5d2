# =====================================================
# FILE: hrcontracts/core/exceptions.py
# Error kinds raised by the contract generation engine
# =====================================================


class ContractEngineError(Exception):
    """Base class for errors surfaced to API callers"""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ContractEngineError):
    """Missing or malformed input (file, name, content)"""

    status_code = 400


class NotFoundError(ContractEngineError):
    """Id does not resolve, or does not belong to the caller's company"""

    status_code = 404


class RenderFailure(ContractEngineError):
    """A renderer raised while producing the DOCX or PDF artifact"""

    status_code = 500

    def __init__(self, message: str, artifact: str = "document"):
        super().__init__(message)
        self.artifact = artifact
