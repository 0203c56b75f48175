"""Request context and response envelope shared by every operation."""

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Context:
    """Per-call context owned by the caller. status_url: base URL of the remote monitoring service."""

    status_url: str


@dataclass(frozen=True)
class Response:
    """Envelope returned by every operation: either result (raw JSON body) or error, never both.

    decode_error is set when the parameter payload could not be fully decoded and defaults were used;
    it does not make the call a failure.
    """

    error: str = ""
    result: Optional[bytes] = None
    decode_error: str = ""

    @property
    def ok(self) -> bool:
        return not self.error and self.result is not None

    def result_json(self) -> Any:
        """Parse result as JSON. None when result is absent; raises ValueError for an invalid body."""
        if self.result is None:
            return None
        return json.loads(self.result)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready dict {error, result[, decode_error]}. A result that is not valid JSON is relayed as text."""
        result: Any = None
        if self.result is not None:
            try:
                result = self.result_json()
            except ValueError:
                result = self.result.decode("utf-8", errors="replace")
        out: Dict[str, Any] = {"error": self.error, "result": result}
        if self.decode_error:
            out["decode_error"] = self.decode_error
        return out
