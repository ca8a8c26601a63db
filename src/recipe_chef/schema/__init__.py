from .recipe_agent_schema import Recipe
from .errors import ErrorKind, ErrorInfo, GenerationError, InputValidationError, ProviderError, ParseError
from .result import Ok, Err, Result
from .workflow_state import Idle, Loading, Succeeded, Failed, WorkflowState
__all__ = [
    "Recipe",
    "ErrorKind", "ErrorInfo", "GenerationError", "InputValidationError", "ProviderError", "ParseError",
    "Ok", "Err", "Result",
    "Idle", "Loading", "Succeeded", "Failed", "WorkflowState",
]
