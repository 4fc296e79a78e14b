import json
from typing import Any


def read_params(body: Any) -> dict[str, Any]:
    """Normalize a tool request body into its parameter mapping.

    Callers send either the parameters themselves or ``{"parameters": {...}}``,
    sometimes as an undecoded JSON string.
    """
    if isinstance(body, (str, bytes)):
        try:
            body = json.loads(body)
        except ValueError:
            return {}

    if not isinstance(body, dict):
        return {}

    nested = body.get("parameters")
    if isinstance(nested, dict):
        return nested
    return body
