"""
Programmers Backend — Request Payload Decoding
================================================

What:  Turns a JSON or form-encoded request body into one flat dict.
Why:   The Angular client sends JSON by default, but classic HTML forms and
       `$httpParamSerializerJQLike` send form-encoded bodies. Both reach the
       same validation code.

Accepted shapes (all normalize to {"name": ..., "experience": ..., "password": ...}):
    application/json                     {"name": "Ada", ...}
                                         {"Programmer": {"name": "Ada", ...}}
    application/x-www-form-urlencoded    name=Ada&experience=3
    multipart/form-data                  Programmer[name]=Ada&Programmer[experience]=3

Blank rule:
    Strings are trimmed (passwords are checked but never altered); empty
    strings and JSON null are dropped, so "blank" and "missing" produce the
    same "cannot be blank" message downstream.
"""

import json
import logging
import re
from typing import Any, Dict, Mapping

from starlette.requests import Request

from app.exceptions import UnsupportedMediaTypeError, ValidationError

logger = logging.getLogger(__name__)

JSON_TYPES = {"application/json", "text/json"}
FORM_TYPES = {"application/x-www-form-urlencoded", "multipart/form-data"}

# Fields whose value is kept byte-for-byte
UNTRIMMED_FIELDS = {"password"}


def media_type(request: Request) -> str:
    raw = request.headers.get("content-type", "")
    return raw.split(";", 1)[0].strip().lower()


def normalize_payload(data: Mapping[str, Any], model_name: str = "Programmer") -> Dict[str, Any]:
    """
    Unwraps model-scoped keys and applies the blank rule.

    >>> normalize_payload({"Programmer[name]": " Ada ", "experience": ""})
    {'name': 'Ada'}
    """
    scoped = data.get(model_name)
    if isinstance(scoped, Mapping):
        data = scoped

    pattern = re.compile(rf"^{re.escape(model_name)}\[(\w+)\]$")
    result: Dict[str, Any] = {}
    for key, value in data.items():
        match = pattern.match(key)
        field = match.group(1) if match else key
        if value is None:
            continue
        if isinstance(value, str):
            if not value.strip():
                continue
            if field not in UNTRIMMED_FIELDS:
                value = value.strip()
        result[field] = value
    return result


async def read_payload(request: Request, model_name: str = "Programmer") -> Dict[str, Any]:
    """
    Reads and normalizes the request body according to its Content-Type.

    Raises:
        ValidationError: JSON body is malformed or not an object (→ 400)
        UnsupportedMediaTypeError: any other content type (→ 415)
    """
    kind = media_type(request)

    if kind in JSON_TYPES or kind.endswith("+json"):
        body = await request.body()
        if not body.strip():
            return {}
        try:
            data = json.loads(body)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ValidationError(
                message="Request body is not valid JSON",
                context={"error": str(e)},
            )
        if not isinstance(data, dict):
            raise ValidationError(
                message="Request body must be a JSON object",
                context={"received": type(data).__name__},
            )
        return normalize_payload(data, model_name)

    if kind in FORM_TYPES:
        form = await request.form()
        # Uploaded files have no meaning for this resource
        fields = {k: v for k, v in form.items() if isinstance(v, str)}
        return normalize_payload(fields, model_name)

    if not kind:
        body = await request.body()
        if not body:
            return {}

    logger.info("Rejected request body with content type '%s'", kind)
    raise UnsupportedMediaTypeError(content_type=kind)
