from typing import Optional


class KamusError(Exception):
    """Base class for errors raised by the resolution services"""


class UpstreamError(KamusError):
    def __init__(self, detail: str, status: Optional[int] = None):
        super().__init__(detail)
        self.detail = detail
        self.status = status


class TranslationFailure(UpstreamError):
    """The outbound translation call failed"""


class GenerationFailure(UpstreamError):
    """The outbound explanation call failed or returned something unparseable"""


class LookupMiss(KamusError, KeyError):
    """Not an error: the word is not in this table, fall through to the next stage"""

    def __str__(self):
        return f"No curated entry for '{self.args[0]}'" if self.args else "No curated entry"
