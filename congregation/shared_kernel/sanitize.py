"""Free-text sanitization applied to every user-supplied string field."""

import re
from typing import Annotated

from pydantic import AfterValidator

MAX_TEXT_LENGTH = 10000

_SCRIPT_BLOCK = re.compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE)
_HTML_TAG = re.compile(r"<[^>]+>")


def sanitize_string(value: str) -> str:
    value = value.strip()
    value = _SCRIPT_BLOCK.sub("", value)
    value = _HTML_TAG.sub("", value)
    return value[:MAX_TEXT_LENGTH]


SanitizedStr = Annotated[str, AfterValidator(sanitize_string)]
